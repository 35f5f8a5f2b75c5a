"""Tests for the rule-based classifiers: geo, intent, subtypes, seasonality, coverage."""

import pytest

from radar.modules.classification.coverage import (
    SITE_ROOT,
    match_to_existing_content,
    suggest_internal_links,
)
from radar.modules.classification.geo import is_in_scope
from radar.modules.classification.intent import Intent, classify_intent
from radar.modules.classification.seasonality import NEUTRAL_BOOST, seasonality_boost
from radar.modules.classification.subtypes import Subtype, tag_subtypes

ODD_INPUTS = [
    "",
    "   ",
    "AUSTIN TACOS",
    "x" * 5000,
    "austin " * 300,
    "¿dónde está el río? 🌮",
    "\t\n",
    "1234567890",
]


# ===========================================================================
# Geo filter
# ===========================================================================
class TestGeoFilter:
    """Allow/deny substring matching for the Austin metro."""

    @pytest.mark.parametrize("keyword", [
        "austin tacos",
        "best bbq in atx",
        "zilker park picnic",
        "round rock donuts",
        "  AUSTIN Breweries  ",
        "hamilton pool reservations",
    ])
    def test_in_scope(self, keyword):
        assert is_in_scope(keyword) is True

    @pytest.mark.parametrize("keyword", [
        "tacos",
        "best pizza near me",
        "houston tx restaurants",
        "",
    ])
    def test_out_of_scope(self, keyword):
        assert is_in_scope(keyword) is False

    def test_deny_list_wins_over_allow_list(self):
        """A competing location excludes the keyword even when Austin is named."""
        assert is_in_scope("austin minnesota restaurants") is False
        assert is_in_scope("austin vs denver cost of living") is False
        assert is_in_scope("moving from chicago to austin") is False


# ===========================================================================
# Intent classifier
# ===========================================================================
class TestIntentClassifier:
    """First matching rule wins, in local > commercial > navigational > informational order."""

    def test_local_beats_commercial(self):
        assert classify_intent("best tacos near me") == Intent.LOCAL

    def test_commercial(self):
        assert classify_intent("best austin bbq") == Intent.COMMERCIAL

    def test_navigational(self):
        assert classify_intent("austin fc schedule") == Intent.NAVIGATIONAL

    def test_informational_signal(self):
        assert classify_intent("history of austin") == Intent.INFORMATIONAL

    def test_default_is_informational(self):
        assert classify_intent("austin weather") == Intent.INFORMATIONAL

    def test_case_insensitive(self):
        assert classify_intent("TACOS NEAR ME") == Intent.LOCAL

    def test_intent_values_are_lowercase_strings(self):
        assert {i.value for i in Intent} == {"commercial", "informational", "local", "navigational"}


# ===========================================================================
# Subtype tagger
# ===========================================================================
class TestSubtypeTagger:
    """Independent word-boundary pattern groups; zero tags is valid."""

    def test_no_tags(self):
        assert tag_subtypes("austin restaurants") == frozenset()

    def test_single_tag(self):
        assert tag_subtypes("austin bbq menu") == {Subtype.MENU}

    def test_near_me(self):
        assert tag_subtypes("tacos near me") == {Subtype.NEAR_ME}

    def test_multiple_tags(self):
        tags = tag_subtypes("bluebonnet festival schedule")
        assert tags == {Subtype.SEASONAL, Subtype.EVENT, Subtype.HOURS}

    def test_word_boundaries(self):
        """'mapping' is not a MAP query and 'jobsite' is not a JOB query."""
        assert Subtype.MAP not in tag_subtypes("austin mapping company")
        assert Subtype.JOB not in tag_subtypes("austin jobsite cleanup")

    def test_map_and_guide(self):
        assert tag_subtypes("zilker park map guide") == {Subtype.MAP, Subtype.GUIDE}


# ===========================================================================
# Seasonality
# ===========================================================================
class TestSeasonality:
    """Month-indexed curves keyed by the first matching fragment."""

    def test_peak_and_off_season(self):
        assert seasonality_boost("austin bluebonnets", month=4) == 1.5
        assert seasonality_boost("austin bluebonnets", month=8) == 0.4

    def test_first_matching_fragment_wins(self):
        """'cedar pollen' hits the pollen curve before the cedar curve."""
        assert seasonality_boost("austin cedar pollen", month=1) == 1.3

    def test_no_match_is_neutral(self):
        assert seasonality_boost("austin weather", month=6) == NEUTRAL_BOOST

    def test_defaults_to_current_month(self):
        value = seasonality_boost("austin crawfish")
        assert 0.3 <= value <= 1.5

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_invalid_month(self, month):
        with pytest.raises(ValueError):
            seasonality_boost("austin crawfish", month=month)


# ===========================================================================
# Coverage mapper
# ===========================================================================
class TestCoverageMapper:
    """First-match coverage lookup and internal link suggestions."""

    def test_match(self):
        match = match_to_existing_content("austin food truck park")
        assert match is not None
        assert match.app == "food-trucks"
        assert match.domain == "food-trucks.atx-apps.com"
        assert match.url == "https://food-trucks.atx-apps.com"

    def test_first_entry_wins(self):
        """'cedar pollen count' matches the cedar app before anything broader."""
        assert match_to_existing_content("austin cedar pollen count").app == "austin-cedar-pollen"

    def test_gap(self):
        assert match_to_existing_content("austin hiking") is None

    def test_main_site_patterns(self):
        match = match_to_existing_content("moving to austin checklist")
        assert match.app == "austin-texas-net"
        assert match.url == "https://austin-texas.net"

    def test_links_collect_topical_apps(self):
        links = suggest_internal_links("austin food truck festival music")
        assert links == [
            "https://food-trucks.atx-apps.com",
            "https://live-music.atx-apps.com",
        ]

    def test_links_exclude_own_app(self):
        links = suggest_internal_links("austin food truck festival music", exclude_app="food-trucks")
        assert links == ["https://live-music.atx-apps.com"]

    def test_links_capped_at_three_and_distinct(self):
        links = suggest_internal_links("kayak rental near apartment with live music and food")
        assert len(links) == 3
        assert len(set(links)) == 3

    def test_links_fall_back_to_site_root(self):
        assert suggest_internal_links("austin zoo") == [SITE_ROOT]


# ===========================================================================
# Totality
# ===========================================================================
class TestTotality:
    """Every classifier returns a value for arbitrary strings."""

    @pytest.mark.parametrize("text", ODD_INPUTS)
    def test_classifiers_never_raise(self, text):
        assert isinstance(is_in_scope(text), bool)
        assert isinstance(classify_intent(text), Intent)
        assert isinstance(tag_subtypes(text), frozenset)
        assert isinstance(seasonality_boost(text, month=5), float)
        match_to_existing_content(text)
        assert 1 <= len(suggest_internal_links(text)) <= 3
