"""Live results, always computed from the vote ledger at request time."""

import math

from talentvote.extensions import db
from talentvote.models import Contestant, Round, User, Vote
from talentvote.models.user import ROLE_JUDGE
from talentvote.services.contestants import get_contestant
from talentvote.services.rounds import get_active_round, get_round


def _round_half_up(value):
    return int(math.floor(value + 0.5))


def approval_percentage(positive_count, total_judge_count):
    # Measured against the whole judge roster, not only the judges who voted.
    if total_judge_count <= 0:
        return 0
    return _round_half_up(positive_count / total_judge_count * 100)


def tally_votes(votes, total_judge_count):
    positive_count = sum(1 for vote in votes if vote.vote)
    negative_count = sum(1 for vote in votes if not vote.vote)

    return {
        "positive_count": positive_count,
        "negative_count": negative_count,
        "total_votes_cast": positive_count + negative_count,
        "approval_percentage": approval_percentage(positive_count, total_judge_count),
    }


def compute_results(contestant_id, total_judge_count):
    votes = Vote.query.filter_by(contestant_id=contestant_id).all()
    return tally_votes(votes, total_judge_count)


def list_judges():
    return User.query.filter_by(role=ROLE_JUDGE).order_by(User.name.asc(), User.id.asc()).all()


def count_judges():
    return User.query.filter_by(role=ROLE_JUDGE).count()


def compute_contestant_results(contestant_id):
    contestant = get_contestant(contestant_id)
    results = compute_results(contestant.id, count_judges())
    return {"contestant": contestant, **results}


def compute_round_summary(round_id, include_hidden=False):
    round_ = get_round(round_id)
    judges = list_judges()
    total_judges = len(judges)

    query = Contestant.query.filter_by(round_id=round_.id)
    if not include_hidden:
        query = query.filter_by(is_visible_to_judges=True)
    contestants = query.order_by(Contestant.order.asc(), Contestant.id.asc()).all()

    votes_by_contestant = {contestant.id: [] for contestant in contestants}
    if contestants:
        votes = Vote.query.filter(Vote.contestant_id.in_(list(votes_by_contestant))).all()
        for vote in votes:
            votes_by_contestant[vote.contestant_id].append(vote)

    rows = []
    for contestant in contestants:
        votes = votes_by_contestant[contestant.id]
        by_judge = {vote.user_id: vote.vote for vote in votes}
        rows.append(
            {
                "contestant": contestant,
                **tally_votes(votes, total_judges),
                "judge_votes": [
                    {"judge": judge, "vote": by_judge.get(judge.id)} for judge in judges
                ],
            }
        )

    return {
        "round": round_,
        "total_judges": total_judges,
        "include_hidden": include_hidden,
        "contestants": rows,
    }


def get_voting_stats():
    active_round = get_active_round()
    return {
        "total_votes": db.session.query(Vote).count(),
        "active_judges": count_judges(),
        "total_contestants": db.session.query(Contestant).count(),
        "current_round": active_round.round_number if active_round else 0,
        "total_rounds": db.session.query(Round).count(),
    }
