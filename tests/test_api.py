import unittest
from datetime import timedelta

from fastapi.testclient import TestClient

from fleetdesk.main import app
from support import (
    API,
    aggregated_vehicle_payload,
    auth_headers,
    collaborator_payload,
    fleet_vehicle_payload,
    fuel_csv,
    reset_database,
    reset_storage,
    today,
)


class ApiTestCase(unittest.TestCase):

    def setUp(self):
        reset_database()
        reset_storage()
        self.client = TestClient(app)
        self.headers = auth_headers()

    def post(self, path, payload):
        return self.client.post(f"{API}{path}", json=payload, headers=self.headers)

    def put(self, path, payload):
        return self.client.put(f"{API}{path}", json=payload, headers=self.headers)

    def get(self, path, **params):
        return self.client.get(f"{API}{path}", params=params, headers=self.headers)

    def create_vehicle(self, **overrides):
        response = self.post("/vehicles/", fleet_vehicle_payload(**overrides))
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def create_collaborator(self, **overrides):
        response = self.post("/collaborators/", collaborator_payload(**overrides))
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()


class TestVehicleRoutes(ApiTestCase):
    """Vehicle registration, filtering and updates."""

    def test_contract_expiring_scenario(self):
        self.create_vehicle(contract_expiry=(today() + timedelta(days=10)).isoformat())

        expiring = self.get("/vehicles/", situation="contract_expiring").json()
        in_workshop = self.get("/vehicles/", situation="in_workshop").json()

        self.assertEqual([v["plate"] for v in expiring["fleet"]], ["ABC-1234"])
        self.assertEqual(in_workshop, {"fleet": [], "aggregated": []})

    def test_list_splits_fleet_and_aggregated(self):
        self.create_vehicle()
        response = self.post("/vehicles/aggregated", aggregated_vehicle_payload())
        self.assertEqual(response.status_code, 201, response.text)
        self.assertEqual(response.json()["chassis"], "")
        self.assertEqual(response.json()["aggregated_cpf"], "987.654.321-00")

        listing = self.get("/vehicles/").json()
        self.assertEqual([v["plate"] for v in listing["fleet"]], ["ABC-1234"])
        self.assertEqual([v["plate"] for v in listing["aggregated"]], ["XYZ1A23"])

    def test_invalid_plate_and_chassis(self):
        self.assertEqual(self.post("/vehicles/", fleet_vehicle_payload(plate="AB-12")).status_code, 422)
        self.assertEqual(self.post("/vehicles/", fleet_vehicle_payload(chassis="SHORT")).status_code, 422)

    def test_rented_vehicle_needs_rental_company(self):
        response = self.post("/vehicles/", fleet_vehicle_payload(ownership_type="rented"))
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["error_type"], "validation_error")
        self.assertIn("rental_company", body["fields"])

    def test_update_rechecks_rules(self):
        vehicle = self.create_vehicle()

        response = self.put(f"/vehicles/{vehicle['id']}", {"ownership_type": "rented"})
        self.assertEqual(response.status_code, 400)

        response = self.put(
            f"/vehicles/{vehicle['id']}",
            {"ownership_type": "rented", "rental_company": "movida", "in_workshop": True},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["rental_company"], "movida")
        self.assertTrue(response.json()["in_workshop"])

        response = self.put(f"/vehicles/{vehicle['id']}", {"ownership_type": "owned"})
        self.assertIsNone(response.json()["rental_company"])

    def test_missing_vehicle(self):
        response = self.get("/vehicles/999")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error_type"], "not_found")

    def test_delete(self):
        vehicle = self.create_vehicle()
        response = self.client.delete(f"{API}/vehicles/{vehicle['id']}", headers=self.headers)
        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.get(f"/vehicles/{vehicle['id']}").status_code, 404)


class TestCollaboratorRoutes(ApiTestCase):
    """Collaborator registration and the vehicle hand-over flow."""

    def test_register_with_vehicle(self):
        vehicle = self.create_vehicle()
        collaborator = self.create_collaborator(vehicle_id=vehicle["id"], odometer=20000)

        self.assertEqual(collaborator["cpf"], "123.456.789-09")
        self.assertEqual(collaborator["current_vehicle_id"], vehicle["id"])
        stored = self.get(f"/vehicles/{vehicle['id']}").json()
        self.assertEqual(stored["collaborator_id"], collaborator["id"])
        self.assertEqual(stored["odometer"], 20000)

    def test_checklist_requires_four_photos_and_damage_descriptions(self):
        payload = collaborator_payload()
        del payload["checklist"]["rear"]
        self.assertEqual(self.post("/collaborators/", payload).status_code, 422)

        payload = collaborator_payload()
        payload["checklist"]["damages"] = [{"photo": {"id": "d/1.jpg", "name": "1.jpg"}, "description": "  "}]
        self.assertEqual(self.post("/collaborators/", payload).status_code, 422)

    def test_edit_moves_vehicle(self):
        first = self.create_vehicle(plate="AAA-1111")
        second = self.create_vehicle(plate="BBB-2222")
        collaborator = self.create_collaborator(vehicle_id=first["id"])

        response = self.put(f"/collaborators/{collaborator['id']}", {"vehicle_id": second["id"]})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["current_vehicle_id"], second["id"])
        self.assertIsNone(self.get(f"/vehicles/{first['id']}").json()["collaborator_id"])
        self.assertEqual(self.get(f"/vehicles/{second['id']}").json()["collaborator_id"], collaborator["id"])

    def test_edit_without_vehicle_id_keeps_assignment(self):
        vehicle = self.create_vehicle()
        collaborator = self.create_collaborator(vehicle_id=vehicle["id"])

        response = self.put(f"/collaborators/{collaborator['id']}", {"department": "Finance"})
        self.assertEqual(response.json()["department"], "Finance")
        self.assertEqual(response.json()["current_vehicle_id"], vehicle["id"])

        response = self.put(f"/collaborators/{collaborator['id']}", {"vehicle_id": None})
        self.assertIsNone(response.json()["current_vehicle_id"])

    def test_failed_reassignment_rolls_back_the_whole_edit(self):
        vehicle = self.create_vehicle()
        collaborator = self.create_collaborator(vehicle_id=vehicle["id"])

        response = self.put(f"/collaborators/{collaborator['id']}", {"department": "Finance", "vehicle_id": 999})
        self.assertEqual(response.status_code, 404)

        stored = self.get(f"/collaborators/{collaborator['id']}").json()
        self.assertEqual(stored["department"], "Logistics")
        self.assertEqual(stored["current_vehicle_id"], vehicle["id"])

    def test_delete_refused_while_assigned(self):
        vehicle = self.create_vehicle()
        collaborator = self.create_collaborator(vehicle_id=vehicle["id"])
        path = f"{API}/collaborators/{collaborator['id']}"

        response = self.client.delete(path, headers=self.headers)
        self.assertEqual(response.status_code, 409)

        self.post(f"/vehicles/{vehicle['id']}/unassign", {})
        self.assertEqual(self.client.delete(path, headers=self.headers).status_code, 204)

    def test_list_filters_and_orders(self):
        self.create_collaborator(name="Bruno Lima", license_expiry=(today() + timedelta(days=5)).isoformat())
        self.create_collaborator(name="Ana Souza", license_expiry=(today() + timedelta(days=200)).isoformat())
        self.create_collaborator(name="Carla Dias", license_expiry=(today() - timedelta(days=1)).isoformat())

        by_expiry = [c["name"] for c in self.get("/collaborators/").json()]
        self.assertEqual(by_expiry, ["Carla Dias", "Bruno Lima", "Ana Souza"])

        by_name = [c["name"] for c in self.get("/collaborators/", order="name").json()]
        self.assertEqual(by_name, ["Ana Souza", "Bruno Lima", "Carla Dias"])

        expired = [c["name"] for c in self.get("/collaborators/", license_status="expired").json()]
        self.assertEqual(expired, ["Carla Dias"])

    def test_responsibility_term(self):
        vehicle = self.create_vehicle()
        collaborator = self.create_collaborator(vehicle_id=vehicle["id"])

        response = self.get(f"/collaborators/{collaborator['id']}/term")
        self.assertEqual(response.status_code, 200)
        self.assertIn("Uelison da Silva Ferreira Couto", response.text)
        self.assertIn("Uelison da S. F. Couto", response.text)
        self.assertIn("ABC-1234", response.text)

    def test_term_needs_a_vehicle(self):
        collaborator = self.create_collaborator()
        response = self.get(f"/collaborators/{collaborator['id']}/term")
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["error_type"], "incomplete_data")


class TestFuelRoutes(ApiTestCase):
    """CSV import and the derived views."""

    def upload(self, data, filename="relatorio.csv"):
        return self.client.post(
            f"{API}/fuel/import",
            files={"file": (filename, data, "text/csv")},
            headers=self.headers,
        )

    def test_reimport_scenario(self):
        report = fuel_csv([
            {"plate": "XYZ9999", "cpf": "11111111111", "name": "Ana", "date": "01/06/2024 08:00:00", "value": "50,00"},
        ])
        self.assertEqual(self.upload(report).json()["total"], 1)
        second = self.upload(report).json()
        self.assertEqual((second["imported"], second["total"]), (1, 1))

        records = self.get("/fuel/data").json()["records"]
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0]["valor"], 50.0)
        self.assertEqual(records[0]["cardPlate"], "XYZ9999")

    def test_non_csv_and_empty_uploads(self):
        self.assertEqual(self.upload(b"x", filename="report.xlsx").status_code, 400)
        self.assertEqual(self.upload(b"").status_code, 400)

    def test_summary_and_transactions(self):
        yesterday = today() - timedelta(days=1)
        report = fuel_csv([
            {"plate": "AAA1111", "cpf": "1", "name": "Ana", "date": f"{yesterday:%d/%m/%Y} 09:00:00",
             "value": "100,00", "fuel": "GASOLINA"},
            {"plate": "BBB2222", "cpf": "2", "name": "Bruno", "date": f"{yesterday:%d/%m/%Y} 19:00:00",
             "value": "30,00", "fuel": "ETANOL"},
        ])
        self.upload(report)

        summary = self.get("/fuel/summary").json()
        self.assertEqual(summary["report_date"], yesterday.isoformat())
        self.assertEqual(summary["daily_total"], 130.0)
        self.assertEqual(summary["weekly_total"], 130.0)

        ethanol = self.get("/fuel/transactions", fuel_type="ethanol").json()
        self.assertEqual([r["cardPlate"] for r in ethanol], ["BBB2222"])

        self.assertEqual(self.get("/fuel/summary", start=yesterday.isoformat()).status_code, 400)


class TestDashboardAndFiles(ApiTestCase):

    def test_stats(self):
        self.create_vehicle(contract_expiry=(today() + timedelta(days=3)).isoformat(), in_workshop=True)
        self.create_vehicle(plate="DEF-5678", ownership_type="rented", rental_company="lok_motors")
        self.create_collaborator()

        stats = self.get("/dashboard/stats").json()
        self.assertEqual(stats["total_vehicles"], 2)
        self.assertEqual((stats["owned"], stats["rented"]), (1, 1))
        self.assertEqual(stats["in_workshop"], 1)
        self.assertEqual(stats["contracts_expiring"], 1)
        self.assertEqual(stats["total_collaborators"], 1)
        self.assertEqual(stats["monthly_fuel_total"], 0.0)

    def test_upload_list_download(self):
        response = self.client.post(
            f"{API}/files/upload",
            data={"entity_type": "vehicles", "entity_id": "7", "label": "CRLV"},
            files={"file": ("documento único.pdf", b"%PDF-1.4", "application/pdf")},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 201, response.text)
        ref = response.json()
        self.assertTrue(ref["id"].startswith("vehicles/7/CRLV_"))
        self.assertTrue(ref["name"].endswith("_documento_unico.pdf"))

        listing = self.get("/files/", entity_type="vehicles", entity_id="7").json()
        self.assertEqual([f["id"] for f in listing], [ref["id"]])

        download = self.get("/files/download", file_id=ref["id"])
        self.assertEqual(download.content, b"%PDF-1.4")
        self.assertEqual(download.headers["content-type"], "application/pdf")

    def test_health_runs_startup(self):
        with TestClient(app) as client:
            response = client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["database"], "connected")


if __name__ == "__main__":
    unittest.main()
