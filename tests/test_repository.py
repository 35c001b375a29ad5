import asyncio

from conftest import make_payload
from core.validator import validate_submission
from schemas.solutionInfo import SolutionSection


def run(coro):
    return asyncio.run(coro)


def submission(**overrides):
    return validate_submission(make_payload(**overrides))


# ------------------------------------------------------------------
# create
# ------------------------------------------------------------------
def test_create_two_sets_scenario(repo):
    solution = run(repo.create(submission()))
    assert solution.id == "two-sets"
    assert solution.is_approved is False
    assert solution.tags == ["dp", "greedy"]
    assert solution.author == "CSES Solver Team"
    assert solution.created_at == solution.updated_at
    assert [s.id for s in solution.sections] == ["two-sets-section-1"]


def test_colliding_titles_get_distinct_ids(repo):
    first = run(repo.create(submission()))
    second = run(repo.create(submission()))
    third = run(repo.create(submission(title="two sets")))
    assert [first.id, second.id, third.id] == ["two-sets", "two-sets-1", "two-sets-2"]


def test_created_record_is_readable_by_id(repo):
    created = run(repo.create(submission()))
    assert run(repo.get_by_id(created.id)) == created
    assert run(repo.get_by_id("nope")) is None


def test_section_ids_follow_order(repo):
    solution = run(
        repo.create(
            submission(
                sections=[
                    {"type": "heading", "content": "Idea"},
                    {"type": "code", "content": "print(1)"},
                    {"type": "hint", "content": "sum is n(n+1)/2"},
                ]
            )
        )
    )
    assert [s.id for s in solution.sections] == [
        "two-sets-section-1",
        "two-sets-section-2",
        "two-sets-section-3",
    ]
    assert solution.sections[1].language == "plaintext"


# ------------------------------------------------------------------
# listing
# ------------------------------------------------------------------
def test_get_approved_filters_and_orders_newest_first(repo):
    old = run(repo.create(submission(title="Weird Algorithm")))
    run(repo.create(submission(title="Missing Number")))
    new = run(repo.create(submission(title="Repetitions")))
    run(repo.toggle_approval(old.id))
    run(repo.toggle_approval(new.id))

    approved = run(repo.get_approved())
    assert [s.id for s in approved] == ["repetitions", "weird-algorithm"]
    assert all(s.is_approved for s in approved)


def test_get_all_includes_pending(repo):
    run(repo.create(submission(title="Weird Algorithm")))
    run(repo.create(submission(title="Missing Number")))
    assert [s.id for s in run(repo.get_all())] == ["missing-number", "weird-algorithm"]


# ------------------------------------------------------------------
# approval toggle
# ------------------------------------------------------------------
def test_toggle_flips_only_approval_and_updated_at(repo):
    created = run(repo.create(submission()))
    toggled = run(repo.toggle_approval(created.id))

    assert toggled.is_approved is True
    assert toggled.updated_at > created.updated_at
    assert toggled.model_dump(exclude={"is_approved", "updated_at"}) == created.model_dump(
        exclude={"is_approved", "updated_at"}
    )


def test_toggle_twice_round_trips(repo):
    created = run(repo.create(submission()))
    run(repo.toggle_approval(created.id))
    back = run(repo.toggle_approval(created.id))

    assert back.is_approved is False
    assert back.updated_at > created.updated_at
    assert back.model_dump(exclude={"updated_at"}) == created.model_dump(exclude={"updated_at"})


def test_toggle_unknown_id_returns_none(repo):
    assert run(repo.toggle_approval("missing")) is None


# ------------------------------------------------------------------
# replace_sections
# ------------------------------------------------------------------
def test_replace_sections_overwrites_and_bumps_updated_at(repo):
    created = run(repo.create(submission()))
    new_sections = [
        SolutionSection(id="two-sets-section-1", type="paragraph", content="better text"),
        SolutionSection(id="", type="code", content="print(2)"),
    ]
    updated = run(repo.replace_sections(created.id, new_sections))

    assert [s.content for s in updated.sections] == ["better text", "print(2)"]
    assert [s.id for s in updated.sections] == ["two-sets-section-1", "two-sets-section-2"]
    assert updated.sections[1].language == "plaintext"
    assert updated.updated_at > created.updated_at
    assert run(repo.get_by_id(created.id)) == updated


def test_replace_sections_reassigns_duplicate_ids(repo):
    created = run(repo.create(submission()))
    dupes = [
        SolutionSection(id="two-sets-section-1", type="paragraph", content="a"),
        SolutionSection(id="two-sets-section-1", type="paragraph", content="b"),
    ]
    updated = run(repo.replace_sections(created.id, dupes))
    ids = [s.id for s in updated.sections]
    assert len(set(ids)) == 2
    assert ids[0] == "two-sets-section-1"


def test_replace_sections_unknown_id_creates_nothing(repo):
    sections = [SolutionSection(id="x", type="paragraph", content="y")]
    assert run(repo.replace_sections("missing", sections)) is None
    assert run(repo.get_all()) == []


def test_returned_records_are_copies(repo):
    created = run(repo.create(submission()))
    fetched = run(repo.get_by_id(created.id))
    fetched.tags.append("mutated")
    assert run(repo.get_by_id(created.id)).tags == ["dp", "greedy"]
