import pytest

from election import db
from election.services.result_service import ResultService


@pytest.fixture
def result_service(app):
    return ResultService()


@pytest.fixture
def cast_votes(make_profile, make_vote):
    def _cast(constituency, candidate, count):
        for _ in range(count):
            make_vote(make_profile("voter", constituency), candidate)
    return _cast


def test_results_sorted_by_votes_descending(result_service, make_constituency, make_party,
                                            make_candidate, cast_votes):
    zone = make_constituency()
    party = make_party("Red")
    a = make_candidate(zone, party, 1, first_name="Alpha")
    b = make_candidate(zone, party, 2, first_name="Bravo")
    c = make_candidate(zone, party, 3, first_name="Charlie")
    cast_votes(zone, a, 3)
    cast_votes(zone, b, 5)

    result = result_service.results_for_constituency(zone.id)

    assert [r["candidateId"] for r in result["candidates"]] == [b.id, a.id, c.id]
    assert [r["voteCount"] for r in result["candidates"]] == [5, 3, 0]
    assert result["totalVotes"] == 8
    assert result["candidates"][0]["candidateName"] == "Bravo Jaidee"
    assert result["candidates"][0]["partyName"] == "Red"


def test_unknown_constituency_returns_none(result_service):
    assert result_service.results_for_constituency(4242) is None


def test_ties_keep_candidate_number_order(result_service, make_constituency, make_party,
                                          make_candidate, cast_votes):
    zone = make_constituency()
    party = make_party()
    second = make_candidate(zone, party, 2)
    first = make_candidate(zone, party, 1)
    cast_votes(zone, first, 2)
    cast_votes(zone, second, 2)

    result = result_service.results_for_constituency(zone.id)
    assert [r["candidateNumber"] for r in result["candidates"]] == [1, 2]


def test_all_results_covers_every_constituency(result_service, make_constituency, make_party,
                                               make_candidate, cast_votes):
    north = make_constituency("Chiang Mai", 1)
    south = make_constituency("Songkhla", 1)
    party = make_party()
    n1 = make_candidate(north, party, 1)
    s1 = make_candidate(south, party, 1)
    s2 = make_candidate(south, party, 2)
    cast_votes(north, n1, 1)
    cast_votes(south, s2, 2)

    results = result_service.all_results()

    assert results["totalVotes"] == 3
    by_id = {r["constituencyId"]: r for r in results["constituencies"]}
    assert by_id[north.id]["totalVotes"] == 1
    assert [r["candidateId"] for r in by_id[south.id]["candidates"]] == [s2.id, s1.id]


def test_all_results_uses_batched_queries(app, result_service, make_constituency, make_party,
                                          make_candidate):
    from sqlalchemy import event

    party = make_party()
    for zone in range(1, 6):
        make_candidate(make_constituency("Bangkok", zone), party, 1)

    statements = []

    def count(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    engine = db.engine
    event.listen(engine, "before_cursor_execute", count)
    try:
        db.session.expire_all()
        result_service.all_results()
    finally:
        event.remove(engine, "before_cursor_execute", count)

    assert len(statements) <= 4


def test_party_stats_ignore_open_constituencies(result_service, make_constituency, make_party,
                                                make_candidate, cast_votes):
    red, blue = make_party("Red"), make_party("Blue")
    closed = make_constituency("Bangkok", 1, is_poll_open=False)
    still_open = make_constituency("Bangkok", 2, is_poll_open=True)
    cast_votes(closed, make_candidate(closed, red, 1), 4)
    make_candidate(closed, blue, 2)
    cast_votes(still_open, make_candidate(still_open, blue, 1), 10)

    seats = {p["name"]: p["seats"] for p in result_service.party_stats()}

    assert seats == {"Red": 1, "Blue": 0}


def test_party_stats_lists_parties_without_seats(result_service, make_party):
    make_party("Lonely")
    assert result_service.party_stats()[0]["seats"] == 0


def test_dashboard_stats_with_no_voters_or_constituencies(result_service):
    stats = result_service.dashboard_stats()

    assert stats["totalVotes"] == 0
    assert stats["totalVoters"] == 0
    assert stats["turnout"] == 0
    assert stats["countingProgress"] == 0
    assert stats["partyStats"] == []


def test_dashboard_stats_turnout_and_progress(result_service, make_constituency, make_party,
                                              make_candidate, make_profile, cast_votes):
    party = make_party()
    zones = [make_constituency("Bangkok", n, is_poll_open=(n != 1)) for n in range(1, 4)]
    candidate = make_candidate(zones[0], party, 1)
    cast_votes(zones[0], candidate, 1)
    make_profile("voter", zones[1])
    make_profile("voter", zones[2])
    make_profile("ec")

    stats = result_service.dashboard_stats()

    assert stats["totalVotes"] == 1
    assert stats["totalVoters"] == 3
    assert stats["turnout"] == 33.33
    assert stats["countingProgress"] == 33.3
    assert stats["partyStats"][0]["seats"] == 1
