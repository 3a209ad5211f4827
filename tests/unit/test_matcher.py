"""Tests for the pairwise contact matcher."""

import pytest

from contactdedupe.scoring import (
    Confidence,
    FieldComparison,
    ScoringConfig,
    combine_scores,
    compare_contacts,
)

# ---------------------------------------------------------------------------
# combine_scores
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_combine_scores_only_counts_contributing_weights() -> None:
    """Test missing fields do not dilute the score."""
    comparisons = [
        (FieldComparison(1.0, ("a",)), 0.40),
        (FieldComparison(), 0.35),
        (FieldComparison(0.5, ("b",)), 0.25),
    ]

    assert combine_scores(comparisons) == pytest.approx((0.40 + 0.125) / 0.65)


@pytest.mark.unit
def test_combine_scores_nothing_contributes() -> None:
    """Test zero similarity when no comparator found evidence."""
    assert combine_scores([(FieldComparison(), 0.4), (FieldComparison(), 0.6)]) == 0.0
    assert combine_scores([]) == 0.0


@pytest.mark.unit
def test_combine_scores_skips_zero_weight() -> None:
    """Test a disabled comparator neither adds score nor weight."""
    comparisons = [
        (FieldComparison(1.0), 0.5),
        (FieldComparison(0.2), 0.0),
    ]

    assert combine_scores(comparisons) == 1.0


# ---------------------------------------------------------------------------
# compare_contacts
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_same_name_only_is_full_similarity(make_contact) -> None:
    """Test one contributing comparator at 1.0 gives similarity 1.0."""
    a = make_contact(1, given_name="John", family_name="Smith")
    b = make_contact(2, given_name="john", family_name="smith")

    match = compare_contacts(a, b)

    assert match.similarity == 1.0
    assert match.confidence is Confidence.HIGH
    assert match.reasons == ("Exact name match",)


@pytest.mark.unit
def test_disjoint_name_parts_do_not_match(make_contact) -> None:
    """Test first-name-only vs last-name-only contacts score zero."""
    a = make_contact(1, given_name="John")
    b = make_contact(2, family_name="Smith")

    match = compare_contacts(a, b)

    assert match.similarity == 0.0
    assert match.reasons == ()
    assert match.confidence is Confidence.LOW


@pytest.mark.unit
def test_weighted_combination_and_reason_order(make_contact) -> None:
    """Test name and email evidence are weighted and listed in order."""
    a = make_contact(1, given_name="Jane", family_name="Doe", email="jane.doe@acme.com")
    b = make_contact(2, given_name="Jane", family_name="Doe", email="janedoe@acme.com")

    match = compare_contacts(a, b)

    expected = (0.40 * 1.0 + 0.25 * 0.875 * 0.9) / (0.40 + 0.25)
    assert match.similarity == pytest.approx(expected)
    assert match.confidence is Confidence.HIGH
    assert match.reasons == (
        "Exact name match",
        "Similar email addresses on same domain (88% match)",
    )


@pytest.mark.unit
def test_unrelated_contacts_score_zero(make_contact) -> None:
    """Test contacts sharing nothing do not match."""
    a = make_contact(1, given_name="John", family_name="Smith", phone="415-555-0100")
    b = make_contact(2, given_name="Mary", family_name="Jones", phone="212-555-0199")

    assert compare_contacts(a, b).similarity == 0.0


@pytest.mark.unit
def test_compare_contacts_is_symmetric(make_contact) -> None:
    """Test swapping contacts keeps similarity and confidence."""
    a = make_contact(
        1, given_name="Jon", family_name="Smith", phone="555-0100", email="jon@acme.com"
    )
    b = make_contact(
        2, given_name="Smith", family_name="John", phone="415-555-0100", email="john@acme.com"
    )

    forward = compare_contacts(a, b)
    backward = compare_contacts(b, a)

    assert forward.similarity == backward.similarity
    assert forward.confidence == backward.confidence


@pytest.mark.unit
def test_compare_contact_with_itself(make_contact) -> None:
    """Test a fully populated contact matches itself perfectly."""
    a = make_contact(
        1, given_name="Jane", family_name="Doe", phone="415-555-0100", email="jane@acme.com"
    )

    match = compare_contacts(a, a)

    assert match.similarity == 1.0
    assert match.reasons == (
        "Exact name match",
        "Identical phone numbers",
        "Identical email addresses",
    )


@pytest.mark.unit
def test_compare_contacts_custom_weights(make_contact) -> None:
    """Test weights are injected through the config."""
    a = make_contact(1, given_name="John", family_name="Smith", phone="415-555-0100")
    b = make_contact(2, given_name="John", family_name="Doe", phone="415-555-0100")
    phone_only = ScoringConfig(name_weight=0.0, phone_weight=1.0, email_weight=0.0)

    match = compare_contacts(a, b, phone_only)

    assert match.similarity == 1.0
    assert match.reasons == ("Identical phone numbers",)


@pytest.mark.unit
def test_pairwise_match_to_dict(make_contact) -> None:
    """Test serialization references contacts by id."""
    a = make_contact("a", given_name="Jane", family_name="Doe")
    b = make_contact("b", given_name="Jane", family_name="Doe")

    data = compare_contacts(a, b).to_dict()

    assert data == {
        "pair_id": "a|b",
        "contact_a": "a",
        "contact_b": "b",
        "similarity": 1.0,
        "reasons": ["Exact name match"],
        "confidence": "high",
    }


# ---------------------------------------------------------------------------
# ScoringConfig
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("similarity", "expected"),
    [
        (1.0, Confidence.HIGH),
        (0.85, Confidence.HIGH),
        (0.8499, Confidence.MEDIUM),
        (0.70, Confidence.MEDIUM),
        (0.6999, Confidence.LOW),
        (0.0, Confidence.LOW),
    ],
)
def test_confidence_tiers(similarity: float, expected: Confidence) -> None:
    """Test tier boundaries are inclusive lower bounds."""
    assert ScoringConfig().confidence_for(similarity) is expected


@pytest.mark.unit
def test_scoring_config_rejects_out_of_range() -> None:
    """Test values outside [0, 1] are rejected."""
    with pytest.raises(ValueError, match="fuzzy_threshold"):
        ScoringConfig(fuzzy_threshold=1.5)


@pytest.mark.unit
def test_scoring_config_rejects_all_zero_weights() -> None:
    """Test at least one weight must be positive."""
    with pytest.raises(ValueError, match="weight"):
        ScoringConfig(name_weight=0.0, phone_weight=0.0, email_weight=0.0)


@pytest.mark.unit
def test_scoring_config_rejects_inverted_tiers() -> None:
    """Test medium tier may not exceed high tier."""
    with pytest.raises(ValueError, match="medium_confidence"):
        ScoringConfig(high_confidence=0.6, medium_confidence=0.7)
