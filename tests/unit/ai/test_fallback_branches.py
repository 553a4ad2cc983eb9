"""Unit tests for rule-based branch suggestions"""
import pytest

from branchpoint.ai.fallback_branches import matching_rule, suggest_branches


class TestJobOfferRule:
    """Tests for employer job offers"""

    def test_two_employers_in_title(self):
        branches = suggest_branches("Should I take the Google or Microsoft job offer?")

        assert [b["name"] for b in branches] == [
            "Accept Microsoft Offer",
            "Accept Google Offer",
        ]
        assert branches[0]["description"] == (
            "Choose the Microsoft position and move forward with their offer."
        )

    def test_second_employer_from_description(self):
        branches = suggest_branches("Job offer from Amazon", "Apple also made me an offer")

        assert [b["name"] for b in branches] == ["Accept Amazon Offer", "Accept Apple Offer"]

    def test_single_employer_uses_placeholder(self):
        branches = suggest_branches("Accept the Amazon offer?")

        assert branches[1]["name"] == "Accept Company B Offer"

    def test_employer_must_be_a_whole_word(self):
        assert matching_rule("Take the metaverse job?") == "yes_no"


class TestEitherOrRule:
    """Tests for "A or B" titles"""

    def test_splits_on_or(self):
        branches = suggest_branches("Should I move to Denver or stay in Chicago?")

        assert [b["name"] for b in branches] == ["Move to Denver", "Stay in Chicago"]
        assert branches[0]["description"] == (
            'Go with "Move to Denver" and commit to what that path involves.'
        )

    def test_rule_name(self):
        assert matching_rule("Rent or buy") == "either_or"

    def test_word_containing_or_does_not_split(self):
        assert matching_rule("Should I buy a motorbike?") == "yes_no"


class TestYesNoRule:
    """Tests for the catch-all rule"""

    @pytest.mark.parametrize("title", ["Should I learn piano?", "", "   "])
    def test_always_two_branches(self, title):
        branches = suggest_branches(title)

        assert [b["name"] for b in branches] == ["Yes - Take Action", "No - Wait or Decline"]
        assert all(b["description"] for b in branches)

    def test_none_description_is_accepted(self):
        assert len(suggest_branches("Quit?", None)) == 2
