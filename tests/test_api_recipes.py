def _create(client, headers, payload):
    resp = client.post("/recipes", json=payload, headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_create_and_get_recipe(client, auth_headers, recipe_payload):
    created = _create(client, auth_headers, recipe_payload(prep_time_minutes=75, tags=["brasileira"]))
    assert created["prep_time_label"] == "1h 15min"
    assert created["calorie_band"] is None
    assert created["ingredients"] == ["Arroz", "Feijão", "Sal"]

    resp = client.get(f"/recipes/{created['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["title"] == "Arroz com Feijão"
    assert client.get("/recipes/999", headers=auth_headers).status_code == 404


def test_recipe_validation(client, auth_headers, recipe_payload):
    assert client.post("/recipes", json=recipe_payload(title="  "), headers=auth_headers).status_code == 422
    assert client.post("/recipes", json=recipe_payload(prep_time_minutes=0), headers=auth_headers).status_code == 422
    assert client.post("/recipes", json=recipe_payload(ingredients=[" "]), headers=auth_headers).status_code == 422
    assert client.post("/recipes", json=recipe_payload(steps=[]), headers=auth_headers).status_code == 422
    assert client.post("/recipes", json=recipe_payload(difficulty="extreme"), headers=auth_headers).status_code == 422


def test_patch_and_delete_recipe(client, auth_headers, recipe_payload):
    recipe_id = _create(client, auth_headers, recipe_payload())["id"]
    resp = client.patch(f"/recipes/{recipe_id}", json={"calories": 420}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["calories"] == 420
    assert client.delete(f"/recipes/{recipe_id}", headers=auth_headers).status_code == 200
    assert client.delete(f"/recipes/{recipe_id}", headers=auth_headers).status_code == 404


def test_patch_rejects_null_for_required_fields(client, auth_headers, recipe_payload):
    recipe_id = _create(client, auth_headers, recipe_payload())["id"]
    for field in ["title", "prep_time_minutes", "difficulty", "ingredients", "steps"]:
        resp = client.patch(f"/recipes/{recipe_id}", json={field: None}, headers=auth_headers)
        assert resp.status_code == 422, field

    resp = client.patch(f"/recipes/{recipe_id}", json={"calories": None}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["title"] == "Arroz com Feijão"


def test_patch_cleans_title_and_tags(client, auth_headers, recipe_payload):
    recipe_id = _create(client, auth_headers, recipe_payload())["id"]
    assert client.patch(f"/recipes/{recipe_id}", json={"title": "   "}, headers=auth_headers).status_code == 422

    resp = client.patch(
        f"/recipes/{recipe_id}",
        json={"title": "  Feijoada ", "tags": ["doce", "  ", " brasileira"]},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["title"] == "Feijoada"
    assert resp.json()["tags"] == ["doce", "brasileira"]


def test_list_by_tag(client, auth_headers, recipe_payload):
    _create(client, auth_headers, recipe_payload(title="Pudim", tags=["Doce"]))
    _create(client, auth_headers, recipe_payload(title="Feijoada", tags=["brasileira"]))
    resp = client.get("/recipes", params={"tag": "doce"}, headers=auth_headers)
    assert [r["title"] for r in resp.json()] == ["Pudim"]
    assert len(client.get("/recipes", headers=auth_headers).json()) == 2


def test_variations(client, auth_headers, recipe_payload):
    original = _create(client, auth_headers, recipe_payload(title="Bolo", calories=400))
    resp = client.post(
        f"/recipes/{original['id']}/variations",
        json={"variations": [{"suffix": "Fit", "calories": 250}, {"suffix": "Vegano", "ingredients": ["Farinha", "Banana"]}]},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    fit, vegan = resp.json()
    assert fit["title"] == "Bolo - Fit"
    assert fit["calories"] == 250
    assert fit["calorie_band"] == "low"
    assert fit["ingredients"] == original["ingredients"]
    assert vegan["title"] == "Bolo - Vegano"
    assert vegan["calories"] == 400
    assert vegan["ingredients"] == ["Farinha", "Banana"]

    resp = client.post("/recipes/999/variations", json={"variations": [{"suffix": "X"}]}, headers=auth_headers)
    assert resp.status_code == 404


def test_variation_with_null_lists_is_rejected(client, auth_headers, recipe_payload):
    original = _create(client, auth_headers, recipe_payload(title="Bolo"))
    for field in ["ingredients", "steps"]:
        resp = client.post(
            f"/recipes/{original['id']}/variations",
            json={"variations": [{"suffix": "Fit", field: None}]},
            headers=auth_headers,
        )
        assert resp.status_code == 422, field

    resp = client.post(
        f"/recipes/{original['id']}/variations",
        json={"variations": [{"suffix": "Fit", "tags": ["leve"]}]},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.json()[0]["ingredients"] == original["ingredients"]
    assert resp.json()[0]["steps"] == original["steps"]


def test_search_endpoints(client, auth_headers, recipe_payload):
    _create(client, auth_headers, recipe_payload(title="Bolo de Chocolate", ingredients=["Chocolate", "Ovo"]))
    _create(client, auth_headers, recipe_payload(title="Bolo", ingredients=["Farinha"]))
    _create(client, auth_headers, recipe_payload(title="Brigadeiro", ingredients=["Chocolate"], tags=["doce"]))

    resp = client.get("/recipes/search", params={"q": "bolo"}, headers=auth_headers)
    assert [r["title"] for r in resp.json()] == ["Bolo", "Bolo de Chocolate"]

    assert client.get("/recipes/search", params={"q": ""}, headers=auth_headers).json() == []
    resp = client.get("/recipes/search", params={"q": "b"}, headers=auth_headers)
    assert resp.status_code == 400

    resp = client.get("/recipes/search", params={"q": "chocolate", "ingredients": True, "order_by": "title"}, headers=auth_headers)
    assert [r["title"] for r in resp.json()] == ["Bolo de Chocolate", "Brigadeiro"]

    resp = client.get("/recipes/search/relevance", params={"q": "Bolo de Chocolate"}, headers=auth_headers)
    top = resp.json()[0]
    assert top["recipe"]["title"] == "Bolo de Chocolate"
    assert top["relevance_score"] == 100
    assert top["matched_in"] == ["title"]

    resp = client.get("/recipes/search/suggestions", params={"q": "bo"}, headers=auth_headers)
    assert resp.json()["suggestions"] == ["Bolo", "Bolo de Chocolate"]


def test_stats_and_common_ingredients(client, auth_headers, recipe_payload):
    first = _create(client, auth_headers, recipe_payload(prep_time_minutes=20, calories=300))
    _create(client, auth_headers, recipe_payload(title="Feijão Tropeiro", prep_time_minutes=70, ingredients=["Feijão", "Farinha"]))
    client.post(f"/favorites/{first['id']}", headers=auth_headers)

    stats = client.get("/recipes/stats", headers=auth_headers).json()
    assert stats["total"] == 2
    assert stats["favorites"] == 1
    assert (stats["quick"], stats["medium"], stats["slow"]) == (1, 0, 1)
    assert stats["average_prep_minutes"] == 45
    assert stats["average_calories"] == 300

    common = client.get("/recipes/ingredients/common", headers=auth_headers).json()
    assert common[0] == {"ingredient": "feijão", "count": 2, "percentage": 100}
