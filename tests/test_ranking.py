import random
from types import SimpleNamespace

import pytest

from leaderboard_api.services.ranking import compute_pr_leaderboard, compute_quiz_leaderboard, pr_status


def _person(roll, name=None):
    return SimpleNamespace(roll_number=roll, name=name or roll.upper(), github_username=f"gh-{roll}")


def _score(roll, quiz=0, prs=0):
    return SimpleNamespace(roll_number=roll, quiz_score=quiz, pr_count=prs)


def test_quiz_ties_ranked_by_roll_number():
    people = [_person("c"), _person("b"), _person("a")]
    scores = [_score("c", quiz=5), _score("b", quiz=10), _score("a", quiz=10)]
    board = compute_quiz_leaderboard(people, scores)
    assert [(e.rank, e.roll_number, e.score) for e in board] == [(1, "a", 10), (2, "b", 10), (3, "c", 5)]


def test_ranking_is_idempotent_and_independent_of_input_order():
    people = [_person(f"r{i:02d}") for i in range(20)]
    scores = [_score(p.roll_number, quiz=i % 4, prs=i % 3) for i, p in enumerate(people)]
    first_quiz = compute_quiz_leaderboard(people, scores)
    first_pr = compute_pr_leaderboard(people, scores)

    rng = random.Random(7)
    for _ in range(5):
        shuffled_people, shuffled_scores = people[:], scores[:]
        rng.shuffle(shuffled_people)
        rng.shuffle(shuffled_scores)
        assert compute_quiz_leaderboard(shuffled_people, shuffled_scores) == first_quiz
        assert compute_pr_leaderboard(shuffled_people, shuffled_scores) == first_pr

    again = compute_quiz_leaderboard(people, scores)
    assert [e.model_dump_json() for e in again] == [e.model_dump_json() for e in first_quiz]


def test_orphan_scores_are_excluded_and_ranks_stay_contiguous():
    people = [_person("a"), _person("c")]
    scores = [_score("a", quiz=1, prs=1), _score("ghost", quiz=99, prs=99), _score("c", quiz=3, prs=0)]
    quiz = compute_quiz_leaderboard(people, scores)
    prs = compute_pr_leaderboard(people, scores)
    assert [(e.rank, e.roll_number) for e in quiz] == [(1, "c"), (2, "a")]
    assert [(e.rank, e.roll_number) for e in prs] == [(1, "a"), (2, "c")]


def test_participant_without_score_is_not_ranked():
    board = compute_quiz_leaderboard([_person("a"), _person("b")], [_score("b", quiz=2)])
    assert [e.roll_number for e in board] == ["b"]


def test_pr_leaderboard_order_and_fields():
    people = [_person("a", "Asha"), _person("b", "Bala")]
    board = compute_pr_leaderboard(people, [_score("a", prs=2), _score("b", prs=6)])
    top = board[0]
    assert top.rank == 1 and top.roll_number == "b"
    assert top.name == "Bala" and top.github_username == "gh-b"
    assert top.status == "6/5 PRs Completed" and top.qualified is True
    assert board[1].model_dump(by_alias=True) == {
        "rank": 2,
        "name": "Asha",
        "rollNumber": "a",
        "githubUsername": "gh-a",
        "prCount": 2,
        "status": "2/5 PRs Completed",
        "qualified": False,
    }


@pytest.mark.parametrize("prs,status,qualified", [
    (0, "0/5 PRs Completed", False),
    (4, "4/5 PRs Completed", False),
    (5, "5/5 PRs Completed", True),
    (12, "12/5 PRs Completed", True),
])
def test_qualification_threshold(prs, status, qualified):
    assert pr_status(prs) == (status, qualified)
    entry = compute_pr_leaderboard([_person("a")], [_score("a", prs=prs)])[0]
    assert entry.status == status
    assert entry.qualified is qualified


def test_empty_input():
    assert compute_quiz_leaderboard([], []) == []
    assert compute_pr_leaderboard([], []) == []
