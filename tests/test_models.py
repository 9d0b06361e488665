from postgisinit.models import ExtensionStatus


def test_status_current_against_explicit_version():
    status = ExtensionStatus(database="appdb", installed_version="3.5.3", default_version="3.5.3")
    assert status.installed is True
    assert status.is_current("3.5.3") is True
    assert status.is_current("3.5.2") is False


def test_status_current_against_default_version():
    status = ExtensionStatus(database="appdb", installed_version="3.5.2", default_version="3.5.3")
    assert status.is_current() is False


def test_status_missing_extension_is_never_current():
    status = ExtensionStatus(database="appdb", default_version="3.5.3")
    assert status.installed is False
    assert status.is_current("3.5.3") is False


def test_status_str_includes_fields():
    s = str(ExtensionStatus(database="appdb", default_version="3.5.3"))
    assert "appdb" in s
    assert "installed=--" in s
    assert "default=3.5.3" in s
