import pytest

from potsweep.automation.pot_resolver import normalise_pot_name, resolve_pots
from potsweep.errors import NoPotGoal, NotFound
from tests.conftest import ACCOUNT_ID, make_pot


def test_normalise_drops_emoji_case_and_whitespace():
    assert normalise_pot_name("  💰 Savings ") == "savings"
    assert normalise_pot_name("Student Loan") == "student loan"
    assert normalise_pot_name("🏖️Holiday") == "holiday"


def test_returns_pots_in_configured_order():
    pots = [make_pot("Bills", 0), make_pot("Savings", 0), make_pot("Holiday", 0)]
    resolved = resolve_pots(pots, ["holiday", "bills", "savings"], ACCOUNT_ID)
    assert [p.name for p in resolved] == ["Holiday", "Bills", "Savings"]


def test_matches_through_emoji_and_case():
    pots = [make_pot("🏠 Rent ", 0)]
    resolved = resolve_pots(pots, ["RENT"], ACCOUNT_ID)
    assert resolved[0].name == "🏠 Rent "


def test_missing_name_raises_not_found():
    pots = [make_pot("Bills", 0)]
    with pytest.raises(NotFound) as exc:
        resolve_pots(pots, ["bills", "lottery"], ACCOUNT_ID)
    assert exc.value.identifier == "lottery"


def test_repeated_name_cannot_rematch_same_pot():
    pots = [make_pot("Bills", 0)]
    with pytest.raises(NotFound) as exc:
        resolve_pots(pots, ["bills", "Bills"], ACCOUNT_ID)
    assert exc.value.identifier == "Bills"


def test_repeated_name_matches_distinct_pots_with_same_name():
    pots = [make_pot("Bills", 0, id="pot_1"), make_pot("bills", 0, id="pot_2")]
    resolved = resolve_pots(pots, ["bills", "bills"], ACCOUNT_ID)
    assert [p.id for p in resolved] == ["pot_1", "pot_2"]


def test_deleted_pots_are_excluded():
    pots = [make_pot("Bills", 0, deleted=True)]
    with pytest.raises(NotFound):
        resolve_pots(pots, ["bills"], ACCOUNT_ID)


def test_other_account_pots_are_excluded_even_with_same_name():
    pots = [
        make_pot("Bills", 0, account_id="acc_joint", id="pot_joint"),
        make_pot("Bills", 0, id="pot_mine"),
    ]
    resolved = resolve_pots(pots, ["bills"], ACCOUNT_ID)
    assert resolved[0].id == "pot_mine"

    with pytest.raises(NotFound):
        resolve_pots(pots[:1], ["bills"], ACCOUNT_ID)


def test_candidate_without_goal_raises_no_pot_goal():
    pots = [make_pot("Bills", 0), make_pot("Lottery", 0, goal=None)]
    with pytest.raises(NoPotGoal) as exc:
        resolve_pots(pots, ["bills"], ACCOUNT_ID)
    assert exc.value.pot_name == "Lottery"


def test_goal_check_ignores_deleted_and_foreign_pots():
    pots = [
        make_pot("Bills", 0),
        make_pot("Old", 0, goal=None, deleted=True),
        make_pot("Theirs", 0, goal=None, account_id="acc_other"),
    ]
    assert len(resolve_pots(pots, ["bills"], ACCOUNT_ID)) == 1


def test_goal_not_required_when_disabled():
    pots = [make_pot("Holiday", 0, goal=None)]
    assert resolve_pots(pots, ["holiday"], ACCOUNT_ID, require_goal=False)[0].name == "Holiday"
