"""Lookups & Health - reference lists and liveness/readiness probes."""


async def test_venues_sorted_by_name(client, seed):
    res = await client.get("/api/venues")
    assert res.status_code == 200
    body = res.json()
    assert body["ok"] is True
    assert [v["VenueName"] for v in body["venues"]] == ["Main Campus", "Online"]
    assert body["venues"][0]["VenueID"] == seed["venues"]["main"].id


async def test_lookups_lists(client, seed):
    body = (await client.get("/api/lookups")).json()
    assert [a["AreaName"] for a in body["areas"]] == ["Curriculum", "Wellbeing"]
    assert [s["SectorName"] for s in body["sectors"]] == ["Primary", "Secondary"]
    assert [s["SiteName"] for s in body["sites"]] == ["North"]


async def test_liveness(client):
    res = await client.get("/api/health")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    res = await client.get("/api/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"
