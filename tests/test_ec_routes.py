import pytest

from election.database.models import Constituency


@pytest.fixture
def ec_headers(make_profile, auth_header):
    return auth_header(make_profile("ec"))


def _candidate_body(party, constituency, **overrides):
    body = {
        "firstName": "Malee",
        "lastName": "Srisuk",
        "candidateNumber": 1,
        "partyId": party.id,
        "constituencyId": constituency.id,
        "nationalId": "3100000000001",
    }
    body.update(overrides)
    return body


def test_create_party_with_defaults(client, ec_headers):
    resp = client.post("/api/ec/parties", json={"name": "Blue Sky"}, headers=ec_headers)
    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["color"] == "#3B82F6"
    assert data["policy"] == ""


def test_party_names_are_unique(client, ec_headers, make_party):
    make_party("Blue Sky")
    other = make_party("Green Earth")

    resp = client.post("/api/ec/parties", json={"name": "Blue Sky"}, headers=ec_headers)
    assert resp.status_code == 400

    resp = client.put(f"/api/ec/parties/{other.id}", json={"name": "Blue Sky"}, headers=ec_headers)
    assert resp.status_code == 400


def test_update_and_delete_party(client, ec_headers, make_party):
    party = make_party("Old Name")

    resp = client.put(f"/api/ec/parties/{party.id}", json={"name": "New Name", "color": "#00B2E3"},
                      headers=ec_headers)
    assert resp.status_code == 200
    assert resp.get_json()["data"]["name"] == "New Name"
    assert resp.get_json()["data"]["color"] == "#00B2E3"

    assert client.delete(f"/api/ec/parties/{party.id}", headers=ec_headers).status_code == 200
    assert client.delete(f"/api/ec/parties/{party.id}", headers=ec_headers).status_code == 404


def test_create_candidate(client, ec_headers, make_party, make_constituency):
    party, zone = make_party(), make_constituency()
    resp = client.post("/api/ec/candidates", json=_candidate_body(party, zone), headers=ec_headers)

    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["party"]["id"] == party.id
    assert data["constituency"]["id"] == zone.id


def test_ec_member_cannot_be_candidate(client, ec_headers, make_party, make_constituency, make_profile):
    make_profile("ec", national_id="3100000000001")
    resp = client.post("/api/ec/candidates",
                       json=_candidate_body(make_party(), make_constituency()), headers=ec_headers)

    assert resp.status_code == 400
    assert "cannot stand" in resp.get_json()["message"]


def test_candidate_needs_existing_party_and_constituency(client, ec_headers, make_party, make_constituency):
    party, zone = make_party(), make_constituency()
    body = _candidate_body(party, zone, partyId=999)
    assert client.post("/api/ec/candidates", json=body, headers=ec_headers).status_code == 404
    body = _candidate_body(party, zone, constituencyId=999)
    assert client.post("/api/ec/candidates", json=body, headers=ec_headers).status_code == 404


def test_filter_candidates(client, ec_headers, make_party, make_constituency, make_candidate):
    red, blue = make_party("Red"), make_party("Blue")
    one, two = make_constituency("Bangkok", 1), make_constituency("Bangkok", 2)
    make_candidate(one, red, 1)
    make_candidate(one, blue, 2)
    make_candidate(two, red, 1)

    resp = client.get(f"/api/ec/candidates?constituencyId={one.id}", headers=ec_headers)
    assert resp.get_json()["meta"]["total"] == 2

    resp = client.get(f"/api/ec/candidates?constituencyId={one.id}&partyId={red.id}", headers=ec_headers)
    assert [c["partyId"] for c in resp.get_json()["data"]] == [red.id]


def test_update_and_delete_candidate(client, ec_headers, make_party, make_constituency, make_candidate):
    candidate = make_candidate(make_constituency(), make_party(), 1)

    resp = client.put(f"/api/ec/candidates/{candidate.id}", json={"candidateNumber": 7}, headers=ec_headers)
    assert resp.get_json()["data"]["candidateNumber"] == 7

    assert client.delete(f"/api/ec/candidates/{candidate.id}", headers=ec_headers).status_code == 200
    assert client.get("/api/ec/candidates", headers=ec_headers).get_json()["meta"]["total"] == 0


def test_poll_control(client, ec_headers, make_constituency):
    one, two = make_constituency("Bangkok", 1), make_constituency("Bangkok", 2)

    resp = client.patch(f"/api/ec/control/{one.id}", json={"isPollOpen": False}, headers=ec_headers)
    assert resp.status_code == 200
    assert resp.get_json()["data"]["isPollOpen"] is False

    client.post("/api/ec/control/close-all", headers=ec_headers)
    assert Constituency.query.filter_by(is_poll_open=True).count() == 0

    client.post("/api/ec/control/open-all", headers=ec_headers)
    assert Constituency.query.filter_by(is_poll_open=False).count() == 0

    listing = client.get("/api/ec/control/constituencies", headers=ec_headers).get_json()
    assert listing["meta"]["limit"] == 50
    assert {c["id"] for c in listing["data"]} == {one.id, two.id}


def test_poll_control_requires_boolean(client, ec_headers, make_constituency):
    zone = make_constituency()
    resp = client.patch(f"/api/ec/control/{zone.id}", json={"isPollOpen": "no"}, headers=ec_headers)
    assert resp.status_code == 400


def test_ec_stats(client, ec_headers, make_party, make_constituency, make_candidate, make_profile, make_vote):
    zone = make_constituency()
    candidate = make_candidate(zone, make_party())
    voters = [make_profile("voter", zone) for _ in range(4)]
    make_vote(voters[0], candidate)

    data = client.get("/api/ec/stats", headers=ec_headers).get_json()["data"]
    assert data == {"totalParties": 1, "totalCandidates": 1, "votedCount": 1, "votedPercentage": 25.0}


def test_oversized_path_id_is_not_found(client, ec_headers):
    resp = client.delete(f"/api/ec/parties/{2 ** 70}", headers=ec_headers)
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False
