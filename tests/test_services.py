def create_service(client, **overrides):
    payload = {
        "name": "Pipe Repair",
        "category": "Plumbing",
        "description": "Fix leaking pipes",
        "priceRange": {"min": 20, "max": 80},
        "pricingModel": "hourly",
        "availability": {"regions": ["Greater Accra"], "isNationwide": False},
        "tags": ["pipes", "leaks"],
        "estimatedDuration": {"min": 30, "max": 120},
    }
    payload.update(overrides)
    return client.post("/api/services", json=payload)


def test_create_and_get_service(client):
    r = create_service(client)
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    service = body["service"]
    assert service["name"] == "Pipe Repair"
    assert service["priceRange"] == {"min": 20, "max": 80}
    assert service["availability"] == {"regions": ["Greater Accra"], "isNationwide": False}
    assert service["icon"] == "settings"
    assert service["providersCount"] == 0
    assert service["averageRating"] == 0

    fetched = client.get(f"/api/services/{service['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["tags"] == ["pipes", "leaks"]


def test_duplicate_name_and_category_conflicts(client):
    assert create_service(client).status_code == 201

    r = create_service(client, description="Another description")
    assert r.status_code == 400
    assert r.json() == {"error": "Service with this name already exists in this category"}

    # same name in another category is fine
    assert create_service(client, category="Emergency").status_code == 201


def test_create_requires_name_category_description(client):
    r = client.post("/api/services", json={"name": "Only a name"})
    assert r.status_code == 400
    details = r.json()["details"]
    assert any(d.startswith("category") for d in details)
    assert any(d.startswith("description") for d in details)


def test_create_rejects_unknown_pricing_model(client):
    assert create_service(client, pricingModel="barter").status_code == 400


def test_update_service(client):
    service_id = create_service(client).json()["service"]["id"]

    r = client.put(f"/api/services/{service_id}", json={"isActive": False, "priceRange": {"min": 25, "max": 90}})
    assert r.status_code == 200
    service = r.json()["service"]
    assert service["isActive"] is False
    assert service["priceRange"] == {"min": 25, "max": 90}
    assert service["name"] == "Pipe Repair"


def test_partial_nested_update_keeps_other_keys(client):
    service_id = create_service(client).json()["service"]["id"]

    r = client.put(f"/api/services/{service_id}", json={"priceRange": {"max": 50}})
    assert r.status_code == 200
    assert r.json()["service"]["priceRange"] == {"min": 20, "max": 50}

    r = client.put(f"/api/services/{service_id}", json={"availability": {"regions": ["Ashanti"]}})
    assert r.status_code == 200
    assert r.json()["service"]["availability"] == {"regions": ["Ashanti"], "isNationwide": False}

    r = client.put(f"/api/services/{service_id}", json={"estimatedDuration": {"min": 10}})
    assert r.status_code == 200
    assert r.json()["service"]["estimatedDuration"] == {"min": 10, "max": 120}


def test_update_into_existing_name_conflicts(client):
    create_service(client, name="Drain Cleaning")
    service_id = create_service(client).json()["service"]["id"]

    r = client.put(f"/api/services/{service_id}", json={"name": "Drain Cleaning"})
    assert r.status_code == 400


def test_update_and_delete_missing_service(client):
    assert client.get("/api/services/404").status_code == 404
    assert client.put("/api/services/404", json={"name": "X"}).status_code == 404
    r = client.delete("/api/services/404")
    assert r.status_code == 404
    assert r.json() == {"error": "Service not found"}


def test_delete_service(client):
    service_id = create_service(client).json()["service"]["id"]

    r = client.delete(f"/api/services/{service_id}")
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Service deleted successfully"}
    assert client.get(f"/api/services/{service_id}").status_code == 404


def test_list_services_filters_and_pagination(client):
    create_service(client, name="Pipe Repair")
    create_service(client, name="Socket Install", category="Electrical", description="New sockets")
    create_service(client, name="Rewiring", category="Electrical", description="Whole house", isActive=False)

    everything = client.get("/api/services").json()
    assert everything["total"] == 3
    assert everything["totalPages"] == 1

    electrical = client.get("/api/services", params={"category": "Electrical"}).json()
    assert electrical["total"] == 2

    active = client.get("/api/services", params={"active": True}).json()
    assert {s["name"] for s in active["items"]} == {"Pipe Repair", "Socket Install"}

    # search spans name, description and category
    assert client.get("/api/services", params={"search": "SOCKETS"}).json()["total"] == 1
    assert client.get("/api/services", params={"search": "plumb"}).json()["total"] == 1

    page = client.get("/api/services", params={"limit": 2, "page": 2}).json()
    assert len(page["items"]) == 1
    assert page["totalPages"] == 2


def test_service_stats_overview(client):
    create_service(client, name="Pipe Repair")
    create_service(client, name="Socket Install", category="Electrical", description="New sockets")
    create_service(client, name="Rewiring", category="Electrical", description="Whole house", isActive=False)

    r = client.get("/api/services/stats/overview")
    assert r.status_code == 200
    assert r.json() == {
        "totalServices": 3,
        "activeServices": 2,
        "inactiveServices": 1,
        "servicesByCategory": [
            {"category": "Electrical", "count": 2},
            {"category": "Plumbing", "count": 1},
        ],
    }


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
