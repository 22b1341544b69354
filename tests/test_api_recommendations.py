def _create(client, headers, payload):
    resp = client.post("/recipes", json=payload, headers=headers)
    assert resp.status_code == 200
    return resp.json()["id"]


def test_recommendations_blend_strategies(client, auth_headers, recipe_payload):
    omelete = _create(client, auth_headers, recipe_payload(title="Omelete", prep_time_minutes=10, ingredients=["Ovo", "Queijo"], tags=["rápida"]))
    pizza = _create(client, auth_headers, recipe_payload(title="Pizza", prep_time_minutes=50, ingredients=["Farinha", "Queijo"], tags=["italiana"]))
    lasanha = _create(client, auth_headers, recipe_payload(title="Lasanha", prep_time_minutes=90, ingredients=["Massa", "Queijo", "Tomate"], tags=["italiana"]))
    sushi = _create(client, auth_headers, recipe_payload(title="Sushi", prep_time_minutes=60, ingredients=["Arroz", "Peixe"], tags=["japonesa"]))

    for name in ["ovo", "queijo"]:
        client.post("/pantry", json={"name": name}, headers=auth_headers)
    client.post(f"/favorites/{lasanha}", headers=auth_headers)

    resp = client.get("/recommendations", params={"limit": 10}, headers=auth_headers)
    assert resp.status_code == 200
    data = resp.json()
    ids = [r["recipe"]["id"] for r in data]
    assert len(ids) == len(set(ids))
    by_id = {r["recipe"]["id"]: r for r in data}

    assert by_id[omelete]["strategy"] == "pantry-based"
    assert by_id[omelete]["score"] == 100
    assert by_id[omelete]["reason"] == "You have 100% of the ingredients"
    # pizza is also the closest match to the favorite, but the pantry entry came first
    assert by_id[pizza]["strategy"] == "pantry-based"
    assert by_id[pizza]["score"] == 50
    assert by_id[lasanha]["strategy"] == "popular"
    assert sushi not in by_id
    assert ids == [omelete, lasanha, pizza]


def test_recommendation_limit(client, auth_headers, recipe_payload):
    for i in range(6):
        _create(client, auth_headers, recipe_payload(title=f"Receita {i}", prep_time_minutes=10 + i))

    data = client.get("/recommendations", params={"limit": 3}, headers=auth_headers).json()
    assert len(data) <= 3

    assert client.get("/recommendations", params={"limit": 0}, headers=auth_headers).status_code == 400
    assert client.get("/recommendations", params={"limit": 51}, headers=auth_headers).status_code == 400


def test_recommendations_with_empty_catalog(client, auth_headers):
    resp = client.get("/recommendations", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == []
