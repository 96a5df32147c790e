from dataclasses import dataclass

import pytest

from modindex.validate import ValidationError
from modindex.version_edit import (
    EditVersion,
    Permissions,
    check_edit_allowed,
    downloads_difference,
    edit_permissions,
    validate_edit_version,
)


@dataclass
class Dep:
    version_id: int | None = None
    project_id: int | None = None
    file_name: str | None = None


def test_admin_gets_all_permissions():
    assert edit_permissions(True, False, None) == Permissions.ALL
    assert edit_permissions(True, True, Permissions.EDIT_BODY) == Permissions.ALL


def test_member_permissions_win_over_moderator():
    perms = Permissions.UPLOAD_VERSION | Permissions.DELETE_VERSION
    assert edit_permissions(False, True, perms) == perms


def test_moderator_without_membership():
    perms = edit_permissions(False, True, None)
    assert perms == Permissions.EDIT_DETAILS | Permissions.EDIT_BODY
    assert Permissions.UPLOAD_VERSION not in perms


def test_stranger_has_no_permissions():
    assert edit_permissions(False, False, None) is None


def test_check_edit_allowed_without_permissions():
    with pytest.raises(PermissionError, match="You do not have permission to edit this version!"):
        check_edit_allowed(None)


def test_check_edit_allowed_without_upload():
    with pytest.raises(PermissionError, match="You do not have the permissions"):
        check_edit_allowed(edit_permissions(False, True, None))


def test_check_edit_allowed_passes_through():
    perms = Permissions.UPLOAD_VERSION
    assert check_edit_allowed(perms) == perms


@pytest.mark.parametrize("old,step", [(0, 5), (100, 1), (7, 0)])
def test_downloads_difference_invariants(old, step):
    assert downloads_difference(old + step, old) == step
    assert downloads_difference(old, old + step) == -step


def test_downloads_difference_decrease():
    assert downloads_difference(0, 1) == -1


def test_valid_edit_is_returned():
    data = EditVersion(name="My Version", version_number="1.0.0", changelog="fixes")
    assert validate_edit_version(data) is data


def test_whitespace_name_rejected():
    with pytest.raises(ValidationError) as info:
        validate_edit_version(EditVersion(name="   "))
    assert str(info.value) == "Field name failed validation with error: Name cannot contain only whitespace."


def test_empty_name_reports_length_first():
    with pytest.raises(ValidationError) as info:
        validate_edit_version(EditVersion(name=""))
    assert str(info.value).endswith("error: length")


def test_long_name_rejected():
    with pytest.raises(ValidationError, match="Field name"):
        validate_edit_version(EditVersion(name="x" * 65))


def test_version_number_regex():
    with pytest.raises(ValidationError) as info:
        validate_edit_version(EditVersion(version_number="1.0 beta"))
    assert str(info.value) == "Field version_number failed validation with error: regex"


def test_version_number_too_long():
    with pytest.raises(ValidationError, match="version_number"):
        validate_edit_version(EditVersion(version_number="1" * 33))


def test_changelog_too_long():
    with pytest.raises(ValidationError, match="changelog"):
        validate_edit_version(EditVersion(changelog="a" * 65537))


def test_duplicate_dependencies_rejected():
    deps = [Dep(project_id=3), Dep(project_id=3)]
    with pytest.raises(ValidationError) as info:
        validate_edit_version(EditVersion(dependencies=deps))
    assert "duplicate dependency" in str(info.value)


def test_distinct_dependencies_accepted():
    deps = [Dep(project_id=3), Dep(version_id=4)]
    data = EditVersion(dependencies=deps)
    assert validate_edit_version(data).dependencies == deps