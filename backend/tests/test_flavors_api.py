"""
HTTP tests for the /flavors resource.
"""

from unittest.mock import patch

MARGHERITA = {"sabor": "Margherita", "preco": 32.5, "tamanho": "medium"}


def test_store_margherita(client, auth_headers):
    response = client.post("/api/v1/flavors", json=MARGHERITA, headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {
        "status": 200,
        "message": "Sabor cadastrado com sucesso!!",
        "sabores": {"id": 1, "sabor": "Margherita", "preco": 32.5, "tamanho": "medium"},
    }


def test_show_unknown_flavor(client):
    response = client.get("/api/v1/flavors/999")

    assert response.status_code == 404
    assert response.json() == {"status": 404, "message": "Sabor não encontrado! Que triste!"}


def test_store_then_show(client, auth_headers):
    created = client.post("/api/v1/flavors", json=MARGHERITA, headers=auth_headers).json()["sabores"]

    response = client.get(f"/api/v1/flavors/{created['id']}")

    assert response.status_code == 200
    assert response.json()["message"] == "Sabor encontrado com sucesso!!"
    assert response.json()["sabores"] == created


def test_store_accepts_numeric_string_price(client, auth_headers):
    payload = {"sabor": "Calabresa", "preco": "29.90", "tamanho": "large"}

    response = client.post("/api/v1/flavors", json=payload, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["sabores"]["preco"] == 29.9


def test_store_reports_every_invalid_field(client, auth_headers):
    response = client.post(
        "/api/v1/flavors",
        json={"sabor": "x" * 256, "preco": "caro"},
        headers=auth_headers,
    )

    assert response.status_code == 422
    assert response.json() == {
        "status": 422,
        "message": "Erro de validação",
        "errors": [
            "O campo sabor não pode ter mais de 255 caracteres",
            "O campo preco deve ser um número",
            "O campo tamanho é obrigatório",
        ],
    }


def test_store_rejects_negative_price(client, auth_headers):
    payload = dict(MARGHERITA, preco=-1)

    response = client.post("/api/v1/flavors", json=payload, headers=auth_headers)

    assert response.status_code == 422
    assert response.json()["errors"] == ["O campo preco deve ser no mínimo 0"]


def test_invalid_size_is_rejected_and_not_listed(client, auth_headers):
    payload = dict(MARGHERITA, tamanho="gigante")

    response = client.post("/api/v1/flavors", json=payload, headers=auth_headers)

    assert response.status_code == 422
    assert response.json()["errors"] == ["O campo tamanho deve ser um dos valores: small, medium, large"]

    listing = client.get("/api/v1/flavors").json()
    assert listing["sabores"]["total"] == 0
    assert listing["sabores"]["data"] == []


def test_store_requires_token(client):
    response = client.post("/api/v1/flavors", json=MARGHERITA)

    assert response.status_code == 401


def test_store_persistence_failure_is_generic_500(client, auth_headers):
    with patch("app.services.flavors.FlavorService.create_flavor", side_effect=RuntimeError("boom")):
        response = client.post("/api/v1/flavors", json=MARGHERITA, headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"status": 500, "message": "Erro ao cadastrar sabor"}


def test_index_empty_page_is_still_success(client):
    response = client.get("/api/v1/flavors?page=3")

    body = response.json()
    assert response.status_code == 200
    assert body["message"] == "Sabores encontrados!!"
    assert body["sabores"]["current_page"] == 3
    assert body["sabores"]["data"] == []


def test_index_pages_of_ten(client, auth_headers):
    for i in range(12):
        client.post("/api/v1/flavors", json=dict(MARGHERITA, sabor=f"Sabor {i}"), headers=auth_headers)

    first = client.get("/api/v1/flavors").json()["sabores"]
    second = client.get("/api/v1/flavors?page=2").json()["sabores"]

    assert len(first["data"]) == 10
    assert len(second["data"]) == 2
    assert first["total"] == 12
    assert set(first["data"][0]) == {"id", "sabor", "preco", "tamanho"}


def test_update_partial(client, auth_headers):
    created = client.post("/api/v1/flavors", json=MARGHERITA, headers=auth_headers).json()["sabores"]

    response = client.patch(
        f"/api/v1/flavors/{created['id']}", json={"preco": 35}, headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Sabor atualizado com sucesso!!"
    assert response.json()["sabores"] == dict(created, preco=35.0)


def test_update_empty_payload_changes_nothing(client, auth_headers):
    created = client.post("/api/v1/flavors", json=MARGHERITA, headers=auth_headers).json()["sabores"]

    response = client.put(f"/api/v1/flavors/{created['id']}", json={}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["sabores"] == created


def test_update_invalid_size(client, auth_headers):
    created = client.post("/api/v1/flavors", json=MARGHERITA, headers=auth_headers).json()["sabores"]

    response = client.put(
        f"/api/v1/flavors/{created['id']}", json={"tamanho": "xl"}, headers=auth_headers
    )

    assert response.status_code == 422
    assert client.get(f"/api/v1/flavors/{created['id']}").json()["sabores"]["tamanho"] == "medium"


def test_update_unknown_flavor(client, auth_headers):
    response = client.put("/api/v1/flavors/999", json={"sabor": "Nova"}, headers=auth_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "Sabor não encontrado! Que triste!"


def test_destroy_twice(client, auth_headers):
    created = client.post("/api/v1/flavors", json=MARGHERITA, headers=auth_headers).json()["sabores"]

    first = client.delete(f"/api/v1/flavors/{created['id']}", headers=auth_headers)
    second = client.delete(f"/api/v1/flavors/{created['id']}", headers=auth_headers)

    assert first.status_code == 200
    assert first.json() == {"status": 200, "message": "Sabor deletado com sucesso!!"}
    assert second.status_code == 404
    assert client.get(f"/api/v1/flavors/{created['id']}").status_code == 404


def test_update_ignores_blank_values(client, auth_headers):
    created = client.post("/api/v1/flavors", json=MARGHERITA, headers=auth_headers).json()["sabores"]

    response = client.patch(
        f"/api/v1/flavors/{created['id']}",
        json={"sabor": "", "preco": " ", "tamanho": ""},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["sabores"] == created


def test_store_rejects_non_finite_price(client, auth_headers):
    for preco in ("Infinity", "-inf", "NaN", "1e400"):
        response = client.post("/api/v1/flavors", json=dict(MARGHERITA, preco=preco), headers=auth_headers)

        assert response.status_code == 422
        assert response.json()["errors"] == ["O campo preco deve ser um número"]

    listing = client.get("/api/v1/flavors")
    assert listing.status_code == 200
    assert listing.json()["sabores"]["total"] == 0


def test_update_rejects_non_finite_price(client, auth_headers):
    created = client.post("/api/v1/flavors", json=MARGHERITA, headers=auth_headers).json()["sabores"]

    response = client.put(
        f"/api/v1/flavors/{created['id']}", json={"preco": "inf"}, headers=auth_headers
    )

    assert response.status_code == 422
    assert client.get(f"/api/v1/flavors/{created['id']}").json()["sabores"]["preco"] == 32.5


def test_index_huge_page_is_empty_success(client, auth_headers):
    client.post("/api/v1/flavors", json=MARGHERITA, headers=auth_headers)

    response = client.get("/api/v1/flavors?page=100000000000000000000")

    body = response.json()
    assert response.status_code == 200
    assert body["sabores"]["total"] == 1
    assert body["sabores"]["data"] == []


def test_index_page_below_one_is_first_page(client, auth_headers):
    client.post("/api/v1/flavors", json=MARGHERITA, headers=auth_headers)

    body = client.get("/api/v1/flavors?page=-5").json()

    assert body["sabores"]["current_page"] == 1
    assert len(body["sabores"]["data"]) == 1
