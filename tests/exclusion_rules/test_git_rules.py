import pytest

from treeconcat.exclusion_rules.git_rules import (
    GitIgnoreExclusionRules,
    add_default_rules,
    create,
    load_directory_rules,
)


@pytest.fixture
def temp_gitignore(tmp_path):
    gitignore = tmp_path / ".gitignore"
    gitignore.write_text("*.txt\n!important.txt\nsubdir/\n*.py[cod]\n**/__pycache__/\n")
    return gitignore


@pytest.mark.parametrize(
    "path,expected",
    [
        ("file.txt", True),
        ("important.txt", False),
        ("file.py", False),
        ("subdir/file.py", True),
        ("subdir/", True),
        ("subdir", False),
        ("another_dir/file.txt", True),
        ("another_dir/file.py", False),
        ("nested/subdir/file.txt", True),
        ("file.pyc", True),
        ("__pycache__/cache_file.py", True),
        ("lib/__pycache__/cache_file.py", True),
    ],
)
def test_gitignore_exclusion_rules(temp_gitignore, path, expected):
    rules = GitIgnoreExclusionRules(temp_gitignore)
    assert rules.exclude(path) == expected, f"Failed for path: {path}"


def test_gitignore_exclusion_rules_empty_file(tmp_path):
    empty = tmp_path / "empty"
    empty.write_text("")
    rules = GitIgnoreExclusionRules(empty)
    assert not rules.exclude("any_file.txt"), "Empty .gitignore should not exclude any files"
    assert not rules.has_rules()


def test_gitignore_exclusion_rules_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        GitIgnoreExclusionRules(tmp_path / "missing")


def test_load_rules_from_several_files(tmp_path):
    first = tmp_path / "first"
    first.write_text("*.log\n")
    second = tmp_path / "second"
    second.write_text("!keep.log\n")
    rules = GitIgnoreExclusionRules([first, second])
    assert rules.exclude("debug.log")
    assert not rules.exclude("keep.log")


def test_add_rule_appends_after_loaded_rules():
    rules = GitIgnoreExclusionRules()
    assert not rules.has_rules()
    rules.add_rule("*.pyc")
    rules.add_rule("!important.pyc")
    assert rules.has_rules()
    assert rules.exclude("test.pyc")
    assert not rules.exclude("important.pyc")


def test_comment_and_blank_lines_add_nothing():
    rules = create()
    rules.add_lines(["# just a comment", ""])
    assert not rules.has_rules()
    assert not rules.exclude("# just a comment")


@pytest.mark.parametrize(
    "path,expected",
    [(".git", True), (".git/", True), ("sub/.git/", True), (".github", False), ("git", False)],
)
def test_default_rules_exclude_git_metadata(path, expected):
    rules = create()
    add_default_rules(rules)
    assert rules.exclude(path) == expected


def test_load_directory_rules_present(tmp_path):
    (tmp_path / ".gitignore").write_text("a.ts\nbuild/\n")
    rules = create()
    assert load_directory_rules(rules, tmp_path) is True
    assert rules.exclude("a.ts")
    assert rules.exclude("build/")
    assert not rules.exclude("b.ts")


def test_load_directory_rules_missing(tmp_path):
    rules = create()
    assert load_directory_rules(rules, tmp_path) is False
    assert not rules.has_rules()


def test_load_directory_rules_blank(tmp_path):
    (tmp_path / ".gitignore").write_text("\n   \n\t\n")
    rules = create()
    assert load_directory_rules(rules, tmp_path) is False
    assert not rules.has_rules()


def test_load_directory_rules_binary(tmp_path):
    (tmp_path / ".gitignore").write_bytes(b"*.py\x00\x01\x02")
    rules = create()
    assert load_directory_rules(rules, tmp_path) is False
    assert not rules.exclude("main.py")


def test_load_directory_rules_undecodable(tmp_path):
    (tmp_path / ".gitignore").write_bytes(b"\xff\xfe\xfa*.py")
    rules = create()
    assert load_directory_rules(rules, tmp_path) is False


def test_load_directory_rules_unreadable(tmp_path):
    # A directory named .gitignore cannot be read as a file
    (tmp_path / ".gitignore").mkdir()
    rules = create()
    assert load_directory_rules(rules, tmp_path) is False


def test_load_directory_rules_missing_directory(tmp_path):
    rules = create()
    assert load_directory_rules(rules, tmp_path / "does-not-exist") is False


def test_load_directory_rules_strips_byte_order_mark(tmp_path):
    (tmp_path / ".gitignore").write_bytes(b"\xef\xbb\xbfa.ts\nc.ts\n")
    rules = create()
    assert load_directory_rules(rules, tmp_path) is True
    assert rules.exclude("a.ts")
    assert rules.exclude("c.ts")


def test_load_rules_strips_byte_order_mark(tmp_path):
    rules_file = tmp_path / "extra.ignore"
    rules_file.write_bytes(b"\xef\xbb\xbf*.log\n")
    rules = GitIgnoreExclusionRules(rules_file)
    assert rules.exclude("server.log")
