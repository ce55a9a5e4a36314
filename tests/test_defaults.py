"""Tests for default engine selection."""

from hybridengines.engines import (
    DefaultEnginePreference,
    DefaultSetComputer,
    EngineCatalog,
    InstalledEngine,
    format_default_engines,
    parse_default_engines,
)


def _pairs(engines):
    return {(e.id, e.version) for e in engines}


class TestParseDefaultEngines:
    def test_empty(self):
        assert parse_default_engines(None) == []
        assert parse_default_engines("") == []
        assert parse_default_engines("   ") == []

    def test_pairs_in_order(self):
        assert parse_default_engines("android:9.0.0, ios:6.2.0") == [
            DefaultEnginePreference("android", "9.0.0"),
            DefaultEnginePreference("ios", "6.2.0"),
        ]

    def test_malformed_entries_are_skipped(self):
        assert parse_default_engines("android,ios:6.2.0,:1.0,windows:,") == [
            DefaultEnginePreference("ios", "6.2.0"),
        ]

    def test_version_may_contain_colons(self):
        assert parse_default_engines("android:https://example.com/a.git") == [
            DefaultEnginePreference("android", "https://example.com/a.git"),
        ]

    def test_format_round_trip(self):
        pref = "android:9.0.0,ios:6.2.0"
        assert format_default_engines(parse_default_engines(pref)) == pref


class TestDefaultSetComputer:
    catalog = EngineCatalog(
        [
            InstalledEngine("A", "1.0"),
            InstalledEngine("A", "2.0"),
            InstalledEngine("B", "1.0"),
        ]
    )

    def test_highest_version_per_id(self):
        result = DefaultSetComputer(self.catalog).compute()
        assert _pairs(result) == {("A", "2.0"), ("B", "1.0")}
        assert len(result) == 2

    def test_explicit_preference(self):
        result = DefaultSetComputer(self.catalog, "A:1.0").compute()
        assert _pairs(result) == {("A", "1.0")}
        assert len(result) == 1

    def test_preference_without_installed_match(self):
        assert DefaultSetComputer(self.catalog, "A:3.0").compute() == []

    def test_preference_keeps_catalog_duplicates(self):
        catalog = EngineCatalog([InstalledEngine("A", "1.0"), InstalledEngine("A", "1.0")])
        assert len(DefaultSetComputer(catalog, "A:1.0").compute()) == 2

    def test_only_malformed_preference_falls_back_to_highest(self):
        result = DefaultSetComputer(self.catalog, "garbage").compute()
        assert _pairs(result) == {("A", "2.0"), ("B", "1.0")}

    def test_empty_catalog(self):
        assert DefaultSetComputer(EngineCatalog()).compute() == []
        assert DefaultSetComputer(EngineCatalog(), "A:1.0").compute() == []

    def test_unparsable_version_never_replaces_selection(self):
        catalog = EngineCatalog(
            [
                InstalledEngine("android", "9.0.0"),
                InstalledEngine("android", "https://github.com/apache/cordova-android.git"),
            ]
        )
        result = DefaultSetComputer(catalog).compute()
        assert _pairs(result) == {("android", "9.0.0")}

    def test_first_seen_unparsable_version_is_kept(self):
        catalog = EngineCatalog(
            [
                InstalledEngine("android", "/home/me/cordova-android"),
                InstalledEngine("android", "9.0.0"),
            ]
        )
        result = DefaultSetComputer(catalog).compute()
        assert _pairs(result) == {("android", "/home/me/cordova-android")}

    def test_numeric_not_lexical_ordering(self):
        catalog = EngineCatalog(
            [InstalledEngine("ios", "9.0.0"), InstalledEngine("ios", "10.0.0")]
        )
        assert _pairs(DefaultSetComputer(catalog).compute()) == {("ios", "10.0.0")}
