"""Minimal smoke tests for the lint importer package."""


def test_package_importable() -> None:
    """Ensure the top-level package exposes the expected namespace."""
    import lint_importer  # noqa: F401  # Imported for side effects
    import lint_importer.cli  # noqa: F401


def test_render_table_lists_issue_locations() -> None:
    from lint_importer.cli import ImportReport, render_table
    from lint_importer.models import InputFile, Issue, IssueLocation, IssueSeverity, RuleKey

    source_file = InputFile(relative_path="src/A.x", language="x")
    report = ImportReport(
        issues=[
            Issue(RuleKey("x-barlint", "R1"), IssueLocation(source_file, "d1", 5), IssueSeverity.LOW),
            Issue(RuleKey("x-barlint", "R2"), IssueLocation(source_file, "d2"), IssueSeverity.HIGH),
        ],
        skipped=[],
        metadata={},
    )

    table = render_table(report)

    assert "src/A.x:5" in table
    assert "x-barlint:R2" in table
    assert report.highest_severity is IssueSeverity.HIGH
    assert table.splitlines()[0].split() == ["Severity", "Rule", "Location", "Message"]
    assert set(table.splitlines()[1]) <= {"-", " "}
    assert report.reaches(IssueSeverity.HIGH)
    assert not report.reaches(IssueSeverity.CRITICAL)


def test_empty_report_renders_placeholder() -> None:
    from lint_importer.cli import ImportReport, render_table
    from lint_importer.models import IssueSeverity

    report = ImportReport(issues=[], skipped=[], metadata={})

    assert render_table(report) == "No issues imported."
    assert not report.reaches(IssueSeverity.INFO)
