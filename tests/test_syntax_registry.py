import pytest

from kilo_engine.syntax import (
    C_PROFILE,
    PYTHON_PROFILE,
    SyntaxProfile,
    SyntaxRegistry,
    default_registry,
    load_default_profiles,
)


def make_profile(name: str = "demo", *patterns: str) -> SyntaxProfile:
    return SyntaxProfile(name=name, file_match=patterns or (".demo",))


def test_extension_patterns_match_the_last_suffix() -> None:
    assert C_PROFILE.matches("main.c")
    assert C_PROFILE.matches("dir.v2/kilo.h")
    assert not C_PROFILE.matches("main.cs")
    assert not C_PROFILE.matches("Makefile")


def test_substring_patterns_match_anywhere() -> None:
    profile = make_profile("make", "Makefile")

    assert profile.matches("src/Makefile.am")
    assert not profile.matches("makefile")


def test_from_keyword_table_splits_secondary_keywords() -> None:
    profile = SyntaxProfile.from_keyword_table("t", [".t"], ["if", "int|", " "])

    assert profile.primary_keywords == frozenset({"if"})
    assert profile.secondary_keywords == frozenset({"int"})


def test_profile_validation() -> None:
    with pytest.raises(ValueError):
        SyntaxProfile(name="")
    with pytest.raises(ValueError):
        SyntaxProfile(name="x", block_comment=("/*", ""))
    assert SyntaxProfile(name="x", line_comment="").line_comment is None


def test_register_and_select() -> None:
    registry = SyntaxRegistry()
    profile = registry.register(make_profile())

    assert "demo" in registry
    assert len(registry) == 1
    assert registry.select("notes.demo") is profile
    assert registry.select("notes.txt") is None
    assert registry.select(None) is None


def test_register_duplicate_name_requires_replace() -> None:
    registry = SyntaxRegistry()
    registry.register(make_profile())

    with pytest.raises(ValueError):
        registry.register(make_profile())

    replacement = make_profile("demo", ".other")
    registry.register(replacement, replace=True)
    assert registry.get("demo") is replacement


def test_get_unknown_profile() -> None:
    with pytest.raises(KeyError):
        SyntaxRegistry().get("missing")


def test_unregister() -> None:
    registry = SyntaxRegistry()
    profile = registry.register(make_profile())

    assert registry.unregister("demo") is profile
    assert registry.unregister("demo") is None
    assert registry.stats().profile_count == 0


def test_first_registered_match_wins() -> None:
    registry = SyntaxRegistry()
    first = registry.register(make_profile("first", ".x"))
    registry.register(make_profile("second", ".x"))

    assert registry.select("a.x") is first


def test_default_registry_contains_builtin_profiles() -> None:
    registry = default_registry()

    assert registry.stats().names == ("c", "python")
    assert registry.select("kilo.c") is C_PROFILE
    assert registry.select("setup.py") is PYTHON_PROFILE


def test_load_default_profiles_keeps_existing_entries() -> None:
    registry = SyntaxRegistry()
    custom = registry.register(make_profile("c", ".c"))

    load_default_profiles(registry)

    assert registry.get("c") is custom
    assert list(registry) == [custom, PYTHON_PROFILE]
