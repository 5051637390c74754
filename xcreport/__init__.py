"""HTML, JUnit and JSON reports from Xcode result bundles."""
