"""Correlation of screenshot attachments into reference/failure/difference triples."""

from collections.abc import Callable, Sequence

from xcreport.models.report import Attachment, ScreenshotTriple, TestCase

REFERENCE = "reference"
FAILURE = "failure"
DIFFERENCE = "difference"

type Screenshots = Sequence[Attachment]
type Partitions = tuple[Screenshots, Screenshots, Screenshots]
type Partitioner = Callable[[Sequence[Attachment]], Partitions]


def partition_by_name(screenshots: Sequence[Attachment]) -> Partitions:
    """Split screenshots by their semantic attachment names."""
    return (
        [s for s in screenshots if s.name == REFERENCE],
        [s for s in screenshots if s.name == FAILURE],
        [s for s in screenshots if s.name == DIFFERENCE],
    )


def partition_by_position(screenshots: Sequence[Attachment]) -> Partitions:
    """Split unnamed screenshots by recording position.

    Relies on the bundle always recording a visual diff as reference, failure,
    difference in that order. Counts that are not a multiple of three yield
    partitions of unequal length.
    """
    return (
        list(screenshots[0::3]),
        list(screenshots[1::3]),
        list(screenshots[2::3]),
    )


def correlate_screenshots(
    test: TestCase,
    *,
    fallback: Partitioner = partition_by_position,
) -> Sequence[ScreenshotTriple]:
    """Group a failing test's screenshots into triples.

    Args:
        test: Test whose attachments are correlated
        fallback: Partitioner used when no screenshot is named "reference"

    Returns:
        Triples in recording order; empty for tests that did not fail, for
        mismatched partitions, and for triples missing a payload

    """
    if test.status != "failure":
        return []

    screenshots = [a for a in test.attachments if a.is_screenshot]
    if any(s.name == REFERENCE for s in screenshots):
        references, failures, differences = partition_by_name(screenshots)
    else:
        references, failures, differences = fallback(screenshots)

    if not len(references) == len(failures) == len(differences):
        return []

    count = len(references)
    triples: list[ScreenshotTriple] = []
    for index, members in enumerate(zip(references, failures, differences)):
        if not all(member.has_content for member in members):
            continue
        reference, failure, difference = members
        triples.append(
            ScreenshotTriple(
                identifier=(
                    test.identifier if count == 1 else f"{test.identifier}_{index + 1}"
                ),
                reference=reference,
                failure=failure,
                difference=difference,
            )
        )
    return triples
