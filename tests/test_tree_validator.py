"""Tests for the recursive data tree walk."""

from registry_verifier.address import AddressChecksummer
from registry_verifier.report import DiagnosticKind, VerificationReport
from registry_verifier.schema_registry import load_validators
from registry_verifier.tree_validator import TreeValidator

from conftest import CHECKSUMMED_ADDRESS, WIDGET_SCHEMA, FakeOwnership


def _walk(repo, ownership=None):
    report = VerificationReport()
    ownership = ownership or FakeOwnership()
    validator = TreeValidator(load_validators(repo / "schema"), ownership, report=report)
    return validator.validate(repo / "data"), report, ownership


def test_valid_tree(make_repo):
    repo = make_repo(
        schemas={"widget": WIDGET_SCHEMA},
        data={"widget.json": {"name": "x"}, "nested/deeper/widget.json": {"name": "y"}},
    )

    valid, report, _ = _walk(repo)

    assert valid is True
    assert report.errors == []
    assert report.warnings == []


def test_schema_mismatch_lists_every_issue(make_repo):
    repo = make_repo(schemas={"widget": WIDGET_SCHEMA}, data={"widget.json": {"name": 5}})

    valid, report, _ = _walk(repo)

    assert valid is False
    [error] = report.errors_of(DiagnosticKind.SCHEMA)
    assert error.path == repo / "data" / "widget.json"
    assert 'does not follow "widget" schema' in error.message
    assert error.details == ("5 is not of type 'string' (at /name)",)


def test_missing_required_field(make_repo):
    repo = make_repo(schemas={"widget": WIDGET_SCHEMA}, data={"widget.json": {}})

    valid, report, _ = _walk(repo)

    assert valid is False
    [error] = report.errors
    assert error.details == ("'name' is a required property",)


def test_files_without_schema_are_accepted(make_repo):
    repo = make_repo(
        schemas={"widget": WIDGET_SCHEMA},
        data={"gadget.json": {"anything": True}, "README.md": "not json at all"},
    )

    valid, report, _ = _walk(repo)

    assert valid is True
    assert report.errors == []


def test_malformed_json_is_reported_but_not_fatal(make_repo):
    repo = make_repo(schemas={"widget": WIDGET_SCHEMA}, data={"widget.json": "{broken"})

    valid, report, ownership = _walk(repo)

    assert valid is True
    [warning] = report.warnings_of(DiagnosticKind.JSON)
    assert warning.message == f'"{repo / "data" / "widget.json"}" is not a valid JSON file.'
    # The ownership check still runs for the unparseable file
    assert repo / "data" / "widget.json" in ownership.queried


def test_malformed_json_does_not_hide_missing_owner(make_repo):
    repo = make_repo(schemas={"widget": WIDGET_SCHEMA}, data={"widget.json": "{broken"})

    valid, report, _ = _walk(repo, FakeOwnership(orphans={"widget.json"}))

    assert valid is False
    assert len(report.warnings_of(DiagnosticKind.JSON)) == 1
    assert len(report.errors_of(DiagnosticKind.CODEOWNERS)) == 1


def test_hidden_entries_and_index_are_skipped(make_repo):
    repo = make_repo(
        schemas={"widget": WIDGET_SCHEMA, "index": {"type": "array"}},
        data={
            "index.json": "{broken",
            ".hidden/widget.json": {},
            ".widget.json": {},
            "sub/index.json": {"not": "an array"},
        },
    )
    ownership = FakeOwnership(orphans={"index.json", ".hidden", ".widget.json"})

    valid, report, ownership = _walk(repo, ownership)

    assert valid is True
    assert report.errors == []
    assert report.warnings == []
    assert ownership.queried == [repo / "data" / "sub"]


def test_index_name_is_configurable(make_repo):
    repo = make_repo(data={"catalog.json": {}})
    report = VerificationReport()
    validator = TreeValidator({}, FakeOwnership(orphans={"catalog.json"}), report=report, index_name="catalog.json")

    assert validator.validate(repo / "data") is True


def test_every_entry_is_checked_for_owners(make_repo):
    repo = make_repo(data={"tokens/list.json": {}, "orphan.json": {}})

    valid, report, _ = _walk(repo, FakeOwnership(orphans={"orphan.json", "tokens"}))

    assert valid is False
    paths = {e.path for e in report.errors_of(DiagnosticKind.CODEOWNERS)}
    assert paths == {repo / "data" / "orphan.json", repo / "data" / "tokens"}
    assert all(e.message.endswith("has no codeowners.") for e in report.errors)


def test_checksummed_directory_passes(make_repo):
    repo = make_repo(data={f"{CHECKSUMMED_ADDRESS}/info.json": {}})

    valid, report, _ = _walk(repo)

    assert valid is True
    assert report.errors == []


def test_wrong_casing_fails_but_still_recurses(make_repo):
    name = CHECKSUMMED_ADDRESS.lower()
    repo = make_repo(
        schemas={"widget": WIDGET_SCHEMA},
        data={f"{name}/widget.json": {}},
    )

    valid, report, _ = _walk(repo)

    assert valid is False
    [checksum] = report.errors_of(DiagnosticKind.ADDRESS_CHECKSUM)
    assert checksum.message.startswith(f'"{name}" is not checksummed.')
    # Contents below the bad directory are still validated
    assert len(report.errors_of(DiagnosticKind.SCHEMA)) == 1


def test_invalid_address_syntax(make_repo):
    repo = make_repo(data={"0x1234/info.json": {}})

    valid, report, _ = _walk(repo)

    assert valid is False
    [error] = report.errors_of(DiagnosticKind.ADDRESS_SYNTAX)
    assert error.message.startswith('"0x1234" is not a valid address.')


def test_address_rule_ignores_files(make_repo):
    repo = make_repo(data={"0x1234.json": {}})

    valid, report, _ = _walk(repo)

    assert valid is True


def test_no_short_circuit_across_siblings(make_repo):
    repo = make_repo(
        schemas={"widget": WIDGET_SCHEMA},
        data={
            "a/widget.json": {},
            "b/widget.json": {"name": 1},
            "c/widget.json": {"name": "ok"},
            "0xabc/widget.json": {"name": "ok"},
            "orphan.json": {},
        },
    )

    valid, report, ownership = _walk(repo, FakeOwnership(orphans={"orphan.json"}))

    assert valid is False
    assert len(report.errors_of(DiagnosticKind.SCHEMA)) == 2
    assert len(report.errors_of(DiagnosticKind.ADDRESS_SYNTAX)) == 1
    assert len(report.errors_of(DiagnosticKind.CODEOWNERS)) == 1
    assert repo / "data" / "c" / "widget.json" in ownership.queried


def test_address_prefix_is_configurable(make_repo):
    class Upper(AddressChecksummer):
        def to_checksum(self, name):
            return name.upper()

    repo = make_repo(data={"addr-abc/info.json": {}, "0xabc/info.json": {}})
    report = VerificationReport()
    validator = TreeValidator({}, FakeOwnership(), checksummer=Upper(), report=report, address_prefix="addr-")

    assert validator.validate(repo / "data") is False
    [error] = report.errors_of(DiagnosticKind.ADDRESS_CHECKSUM)
    assert error.path == repo / "data" / "addr-abc"
