import errno
import io
import os

import pytest

from minishex.cd import CdError, builtin_cd, canonicalize, raw_curpath
from minishex.env import Environment


@pytest.fixture
def base(tmp_path):
    return tmp_path.resolve()


def test_canonicalize_removes_dot_components_and_slashes(base):
    root = str(base)
    assert canonicalize(root + "/./a//./b/") == root + "/a/b"


def test_canonicalize_repeated_dot_components(base):
    root = str(base)
    assert canonicalize(root + "/././x/.") == root + "/x"


def test_canonicalize_dot_dot_in_middle(base):
    (base / "d").mkdir()
    root = str(base)
    assert canonicalize(root + "/d/../e") == root + "/e"


def test_canonicalize_trailing_dot_dot(base):
    (base / "d").mkdir()
    root = str(base)
    assert canonicalize(root + "/d/..") == root


def test_canonicalize_nested_dot_dots(base):
    (base / "a" / "b").mkdir(parents=True)
    root = str(base)
    assert canonicalize(root + "/a/b/../..") == root


def test_canonicalize_root_cases():
    assert canonicalize("/..") == "/"
    assert canonicalize("/.") == "/"
    assert canonicalize("/") == "/"


def test_canonicalize_missing_component(base):
    root = str(base)
    with pytest.raises(CdError) as info:
        canonicalize(root + "/missing/../e")
    assert info.value.path == root + "/missing"
    assert info.value.reason == os.strerror(errno.ENOENT)


def test_canonicalize_not_a_directory(base):
    (base / "f").write_text("data")
    root = str(base)
    with pytest.raises(CdError) as info:
        canonicalize(root + "/f/..")
    assert info.value.path == root + "/f"
    assert str(info.value) == f"cd: {root}/f: {os.strerror(errno.ENOTDIR)}"


def test_canonicalize_is_idempotent(base):
    (base / "d").mkdir()
    root = str(base)
    once = canonicalize(root + "//d/./../d//")
    assert canonicalize(once) == once
    assert once == root + "/d"


def test_raw_curpath_absolute_unchanged(base):
    path = str(base) + "/./x"
    assert raw_curpath(Environment(), path) == path


def test_raw_curpath_relative_uses_cwd(base, monkeypatch):
    monkeypatch.chdir(base)
    assert raw_curpath(Environment(), "sub") == f"{os.getcwd()}/sub"


def test_raw_curpath_uses_cdpath(base, monkeypatch, tmp_path_factory):
    (base / "sub").mkdir()
    monkeypatch.chdir(tmp_path_factory.mktemp("elsewhere"))
    env = Environment.from_mapping({"CDPATH": f"/nonexistent:{base}"})
    assert raw_curpath(env, "sub") == f"{base}/sub"


def test_raw_curpath_empty_cdpath_entry_means_current(base, monkeypatch):
    (base / "sub").mkdir()
    monkeypatch.chdir(base)
    env = Environment.from_mapping({"CDPATH": ":/nonexistent"})
    assert raw_curpath(env, "sub") == "./sub"


def test_raw_curpath_cdpath_no_match_falls_back(base, monkeypatch):
    monkeypatch.chdir(base)
    env = Environment.from_mapping({"CDPATH": "/nonexistent"})
    assert raw_curpath(env, "sub") == f"{os.getcwd()}/sub"


def test_raw_curpath_dot_slash_skips_cdpath(base, monkeypatch, tmp_path_factory):
    (base / "sub").mkdir()
    monkeypatch.chdir(tmp_path_factory.mktemp("elsewhere"))
    env = Environment.from_mapping({"CDPATH": str(base)})
    assert raw_curpath(env, "./sub") == f"{os.getcwd()}/./sub"


def test_cd_changes_directory_and_updates_pwd(base, monkeypatch):
    monkeypatch.chdir(base)
    target = base / "sub"
    target.mkdir()
    env = Environment.from_mapping({"PWD": str(base)})
    err = io.StringIO()
    assert builtin_cd(env, [str(target)], err) == 0
    assert os.path.samefile(os.getcwd(), target)
    assert env.get("PWD").value == str(target)
    assert env.get("OLDPWD").value == str(base)
    assert err.getvalue() == ""


def test_cd_adds_missing_pwd_variables(base, monkeypatch):
    monkeypatch.chdir(base)
    env = Environment()
    assert builtin_cd(env, [str(base)], io.StringIO()) == 0
    assert env.get("PWD").value == str(base)
    assert env.get("OLDPWD").value is None


def test_cd_uses_home(base, monkeypatch):
    monkeypatch.chdir(base)
    home = base / "home"
    home.mkdir()
    env = Environment.from_mapping({"HOME": str(home)})
    assert builtin_cd(env, [], io.StringIO()) == 0
    assert os.path.samefile(os.getcwd(), home)
    assert env.get("PWD").value == str(home)


def test_cd_home_not_set(base, monkeypatch):
    monkeypatch.chdir(base)
    err = io.StringIO()
    assert builtin_cd(Environment(), [], err) == 1
    assert "HOME not set" in err.getvalue()
    assert os.path.samefile(os.getcwd(), base)


def test_cd_too_many_arguments(base, monkeypatch):
    monkeypatch.chdir(base)
    err = io.StringIO()
    assert builtin_cd(Environment(), ["a", "b"], err) == 1
    assert "too many arguments" in err.getvalue()
    assert os.path.samefile(os.getcwd(), base)


def test_cd_invalid_option(base, monkeypatch):
    monkeypatch.chdir(base)
    err = io.StringIO()
    assert builtin_cd(Environment(), ["-L", str(base)], err) == 1
    assert "-L" in err.getvalue()


def test_cd_nonexistent_directory(base, monkeypatch):
    monkeypatch.chdir(base)
    env = Environment.from_mapping({"PWD": str(base)})
    err = io.StringIO()
    missing = str(base / "missing")
    assert builtin_cd(env, [missing], err) == 1
    assert err.getvalue() == f"cd: {missing}: {os.strerror(errno.ENOENT)}\n"
    assert env.get("PWD").value == str(base)
    assert "OLDPWD" not in env


def test_cd_dot_dot_goes_to_parent(base, monkeypatch):
    sub = base / "sub"
    sub.mkdir()
    monkeypatch.chdir(sub)
    env = Environment()
    assert builtin_cd(env, [".."], io.StringIO()) == 0
    assert os.path.samefile(os.getcwd(), base)
    assert os.path.samefile(env.get("PWD").value, base)