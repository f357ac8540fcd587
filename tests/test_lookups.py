# =============================================================================
# tests/test_lookups.py - Lookup & FAQ Endpoint Tests
# =============================================================================
# This module contains tests for:
# - Roles, asset statuses, asset types and assignable profiles
# - Asset type creation with unique names
# - FAQ CRUD
# =============================================================================

from tests.conftest import ADMIN_ID, TECH_ID


# =============================================================================
# Lookup Tests
# =============================================================================

class TestLookups:
    """Test the lookup table endpoints."""

    def test_roles_description(self, client, prefix, admin_headers):
        response = client.get(f"{prefix}/roles", headers=admin_headers)

        assert response.json() == [
            {"id": 1, "name": "admin", "description": "Administrador", "permissions": {"description": "Administrador"}},
            {"id": 2, "name": "tecnico", "description": "Rol: tecnico", "permissions": None},
        ]

    def test_asset_status_ordered_by_id(self, client, prefix, admin_headers):
        response = client.get(f"{prefix}/asset-status", headers=admin_headers)
        assert [row["id"] for row in response.json()] == [1, 2, 3, 4]

    def test_asset_types_ordered_by_name(self, client, prefix, admin_headers, fake_db):
        fake_db.seed("asset_types", {"name": "Cámara", "description": None})

        response = client.get(f"{prefix}/asset-types", headers=admin_headers)

        assert [row["name"] for row in response.json()] == ["Cámara", "Laptop", "Proyector"]

    def test_profiles_for_assignment(self, client, prefix, admin_headers):
        everyone = client.get(f"{prefix}/profiles", headers=admin_headers).json()
        technicians = client.get(
            f"{prefix}/profiles",
            params={"for_assignment": "true"},
            headers=admin_headers,
        ).json()

        assert [row["id"] for row in everyone] == [ADMIN_ID, TECH_ID]
        assert [row["id"] for row in technicians] == [TECH_ID]


class TestCreateAssetType:
    """Test POST /asset-types."""

    def test_creates(self, client, prefix, admin_headers):
        response = client.post(
            f"{prefix}/asset-types",
            json={"name": "  Tablet ", "description": ""},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["name"] == "Tablet"
        assert response.json()["description"] is None

    def test_duplicate_name(self, client, prefix, admin_headers):
        response = client.post(f"{prefix}/asset-types", json={"name": "Laptop"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"] == 'Ya existe un tipo de equipo con el nombre "Laptop"'

    def test_name_required(self, client, prefix, admin_headers):
        response = client.post(f"{prefix}/asset-types", json={}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "El nombre del tipo de equipo es obligatorio"


# =============================================================================
# FAQ Tests
# =============================================================================

class TestFAQs:
    """Test FAQ CRUD."""

    def test_create_owned_by_caller(self, client, prefix, tech_headers):
        response = client.post(
            f"{prefix}/faqs",
            json={"question": " ¿Cómo pido un equipo? ", "answer": "Desde Préstamos.", "category": ""},
            headers=tech_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["question"] == "¿Cómo pido un equipo?"
        assert body["created_by"] == TECH_ID
        assert body["category"] is None

    def test_question_and_answer_required(self, client, prefix, admin_headers):
        response = client.post(f"{prefix}/faqs", json={"question": "¿Algo?"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "La pregunta y respuesta son obligatorias"

    def test_list_get_update_delete(self, client, prefix, admin_headers, fake_db):
        faq = fake_db.seed("faqs", {
            "question": "¿Horario?",
            "answer": "9 a 18",
            "created_by": ADMIN_ID,
            "created_at": "2024-01-01T00:00:00Z",
        })[0]
        url = f"{prefix}/faqs/{faq['id']}"

        assert len(client.get(f"{prefix}/faqs", headers=admin_headers).json()) == 1
        assert client.get(url, headers=admin_headers).json()["answer"] == "9 a 18"

        updated = client.put(url, json={"question": "¿Horario?", "answer": "8 a 17"}, headers=admin_headers)
        assert updated.status_code == 200
        assert updated.json()["answer"] == "8 a 17"

        deleted = client.delete(url, headers=admin_headers)
        assert deleted.json() == {"message": "FAQ eliminada exitosamente"}
        assert fake_db.rows("faqs") == []

    def test_missing_faq(self, client, prefix, admin_headers):
        url = f"{prefix}/faqs/999"

        assert client.get(url, headers=admin_headers).status_code == 404
        assert client.put(url, json={"question": "q", "answer": "a"}, headers=admin_headers).status_code == 404
        response = client.delete(url, headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "FAQ no encontrada"

    def test_unknown_asset_rejected(self, client, prefix, admin_headers, fake_db):
        response = client.post(
            f"{prefix}/faqs",
            json={"question": "¿Garantía?", "answer": "Un año.", "asset_id": 424242},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Equipo no encontrado"
        assert fake_db.rows("faqs") == []

    def test_linked_to_existing_asset(self, client, prefix, admin_headers, seed_asset):
        asset = seed_asset()

        response = client.post(
            f"{prefix}/faqs",
            json={"question": "¿Garantía?", "answer": "Un año.", "asset_id": asset["id"]},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["asset_id"] == asset["id"]
