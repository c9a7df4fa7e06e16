# tests/test_routers/test_assignment_router.py

import unittest
import uuid
from datetime import date
from types import SimpleNamespace as Obj
from unittest.mock import patch

from fastapi import HTTPException
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from main import app
from core.database import get_db
from auth.service import get_current_role
from authz.deps import require_admin

STAFF_ID = uuid.uuid4()
VENUE_ID = uuid.uuid4()
ASSIGNMENT_ID = uuid.uuid4()


def _assignment(**kw):
    data = dict(
        id=ASSIGNMENT_ID,
        date=date(2024, 6, 3),
        staff_id=STAFF_ID,
        venue_id=VENUE_ID,
        start_time="08:00",
        end_time=None,
        notes=None,
        status="PLANNED",
        created_at=None,
        updated_at=None,
        staff=Obj(id=STAFF_ID, name="Jason", role=None, active=True, created_at=None, updated_at=None),
        venue=Obj(id=VENUE_ID, type="MARKET", name="Festival Place", town="Christchurch",
                  address=None, notes=None, typical_days=None, created_at=None, updated_at=None),
    )
    data.update(kw)
    return Obj(**data)


class AssignmentRouterTests(unittest.TestCase):
    def setUp(self):
        class FakeDB:
            def rollback(self): pass
        def _fake_db():
            yield FakeDB()

        app.dependency_overrides[get_db] = _fake_db
        app.dependency_overrides[get_current_role] = lambda: "admin"
        app.dependency_overrides[require_admin] = lambda: None

        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)
        app.dependency_overrides.pop(get_current_role, None)
        app.dependency_overrides.pop(require_admin, None)

    # --- LIST ---

    @patch("assignment.router.service.get_assignments")
    def test_list_assignments_happy_path(self, mock_list):
        mock_list.return_value = [_assignment(), _assignment(id=uuid.uuid4(), date=date(2024, 6, 4))]
        resp = self.client.get("/api/assignments?from=2024-06-01&to=2024-06-30")
        self.assertEqual(resp.status_code, 200, resp.text)
        data = resp.json()
        self.assertEqual(len(data), 2)
        self.assertEqual(data[0]["date"], "2024-06-03")
        self.assertEqual(data[0]["venue"]["name"], "Festival Place")
        self.assertEqual(data[0]["staff"]["name"], "Jason")

    @patch("assignment.router.service.get_assignments")
    def test_list_assignments_passes_filters(self, mock_list):
        mock_list.return_value = []
        resp = self.client.get(
            f"/api/assignments?from=2024-06-01&to=2024-06-07&staff_id={STAFF_ID}&venue_id={VENUE_ID}"
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        kwargs = mock_list.call_args.kwargs
        self.assertEqual(kwargs["from_date"], date(2024, 6, 1))
        self.assertEqual(kwargs["to_date"], date(2024, 6, 7))
        self.assertEqual(kwargs["staff_id"], STAFF_ID)
        self.assertEqual(kwargs["venue_id"], VENUE_ID)

    def test_list_assignments_422_without_window(self):
        resp = self.client.get("/api/assignments?from=2024-06-01")
        self.assertEqual(resp.status_code, 422)

    def test_list_assignments_422_bad_date(self):
        resp = self.client.get("/api/assignments?from=2024-6-1&to=2024-06-07")
        self.assertEqual(resp.status_code, 422)

    # --- GET /{id} ---

    @patch("assignment.router.service.get_assignment")
    def test_get_assignment_200(self, mock_get):
        mock_get.return_value = _assignment()
        resp = self.client.get(f"/api/assignments/{ASSIGNMENT_ID}")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["id"], str(ASSIGNMENT_ID))

    @patch("assignment.router.service.get_assignment")
    def test_get_assignment_404(self, mock_get):
        mock_get.return_value = None
        resp = self.client.get(f"/api/assignments/{uuid.uuid4()}")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "Assignment not found")

    @patch("assignment.router.service.get_assignment")
    def test_storage_fault_is_opaque_500(self, mock_get):
        mock_get.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))
        resp = self.client.get(f"/api/assignments/{ASSIGNMENT_ID}")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"detail": "Internal server error"})

    # --- POST ---

    @patch("assignment.router.service.create_assignment")
    def test_create_assignment_201(self, mock_create):
        mock_create.return_value = (_assignment(), False)
        resp = self.client.post(
            "/api/assignments",
            json={"date": "2024-06-03", "staff_id": str(STAFF_ID), "venue_id": str(VENUE_ID), "start_time": "08:00"},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        self.assertFalse(resp.json()["replaced"])
        dto = mock_create.call_args.args[1]
        self.assertFalse(dto.replace_existing)
        self.assertEqual(dto.status, "PLANNED")

    @patch("assignment.router.service.create_assignment")
    def test_create_assignment_replaced_200(self, mock_create):
        mock_create.return_value = (_assignment(), True)
        resp = self.client.post(
            "/api/assignments",
            json={"date": "2024-06-03", "staff_id": str(STAFF_ID), "venue_id": str(VENUE_ID), "replace_existing": True},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertTrue(body["replaced"])
        self.assertEqual(body["id"], str(ASSIGNMENT_ID))

    @patch("assignment.router.service.create_assignment")
    def test_create_assignment_409_collision(self, mock_create):
        mock_create.side_effect = HTTPException(
            status_code=409,
            detail={"error": "Collision detected", "message": "taken", "existing_assignment": {"venue_id": str(VENUE_ID)}},
        )
        resp = self.client.post(
            "/api/assignments",
            json={"date": "2024-06-03", "staff_id": str(STAFF_ID), "venue_id": str(uuid.uuid4())},
        )
        self.assertEqual(resp.status_code, 409, resp.text)
        detail = resp.json()["detail"]
        self.assertEqual(detail["error"], "Collision detected")
        self.assertEqual(detail["existing_assignment"]["venue_id"], str(VENUE_ID))

    def test_create_assignment_422_bad_time(self):
        resp = self.client.post(
            "/api/assignments",
            json={"date": "2024-06-03", "staff_id": str(STAFF_ID), "venue_id": str(VENUE_ID), "start_time": "24:00"},
        )
        self.assertEqual(resp.status_code, 422)

    def test_create_assignment_422_bad_status(self):
        resp = self.client.post(
            "/api/assignments",
            json={"date": "2024-06-03", "staff_id": str(STAFF_ID), "venue_id": str(VENUE_ID), "status": "DONE"},
        )
        self.assertEqual(resp.status_code, 422)

    def test_create_assignment_422_bad_ids(self):
        resp = self.client.post(
            "/api/assignments",
            json={"date": "2024-06-03", "staff_id": "not-a-uuid", "venue_id": str(VENUE_ID)},
        )
        self.assertEqual(resp.status_code, 422)

    # --- PATCH /{id} ---

    @patch("assignment.router.service.update_assignment")
    def test_update_assignment_200(self, mock_update):
        mock_update.return_value = _assignment(status="CONFIRMED")
        resp = self.client.patch(f"/api/assignments/{ASSIGNMENT_ID}", json={"status": "CONFIRMED"})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["status"], "CONFIRMED")
        self.assertEqual(mock_update.call_args.args[1], ASSIGNMENT_ID)

    @patch("assignment.router.service.get_assignment")
    @patch("assignment.router.service.update_assignment")
    def test_update_assignment_404(self, mock_update, mock_get):
        # Note: decorator closest to the function is the FIRST arg
        mock_update.side_effect = HTTPException(status_code=404, detail="Assignment not found")
        resp = self.client.patch(f"/api/assignments/{ASSIGNMENT_ID}", json={"notes": "x"})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "Assignment not found")
        mock_update.assert_called_once()
        mock_get.assert_not_called()

    @patch("assignment.router.service.update_assignment")
    def test_update_assignment_409(self, mock_update):
        mock_update.side_effect = HTTPException(
            status_code=409,
            detail={"error": "Collision detected", "message": "Staff member already has an assignment on this date",
                    "existing_assignment": None},
        )
        resp = self.client.patch(f"/api/assignments/{ASSIGNMENT_ID}", json={"date": "2024-06-04"})
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["detail"]["error"], "Collision detected")

    def test_update_assignment_422_null_date(self):
        resp = self.client.patch(f"/api/assignments/{ASSIGNMENT_ID}", json={"date": None})
        self.assertEqual(resp.status_code, 422)

    # --- DELETE /{id} ---

    @patch("assignment.router.service.delete_assignment")
    def test_delete_assignment_204(self, mock_delete):
        mock_delete.return_value = True
        resp = self.client.delete(f"/api/assignments/{ASSIGNMENT_ID}")
        self.assertEqual(resp.status_code, 204, resp.text)

    @patch("assignment.router.service.delete_assignment")
    def test_delete_assignment_404(self, mock_delete):
        mock_delete.return_value = False
        resp = self.client.delete(f"/api/assignments/{ASSIGNMENT_ID}")
        self.assertEqual(resp.status_code, 404, resp.text)
        self.assertEqual(resp.json()["detail"], "Assignment not found")

    # --- POST /copy-week ---

    @patch("assignment.router.copy_week_service")
    def test_copy_week_200(self, mock_copy):
        mock_copy.return_value = {
            "message": "Copied 1 assignments, skipped 1",
            "created": [_assignment(date=date(2024, 6, 10))],
            "skipped": [{"date": date(2024, 6, 11), "staff_id": STAFF_ID, "reason": "Already has assignment"}],
        }
        resp = self.client.post(
            "/api/assignments/copy-week",
            json={"source_start_date": "2024-06-03", "target_start_date": "2024-06-10", "staff_ids": [str(STAFF_ID)]},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertEqual(body["message"], "Copied 1 assignments, skipped 1")
        self.assertEqual(body["created"][0]["date"], "2024-06-10")
        self.assertEqual(body["skipped"], [
            {"date": "2024-06-11", "staff_id": str(STAFF_ID), "reason": "Already has assignment"},
        ])
        kwargs = mock_copy.call_args.kwargs
        self.assertEqual(kwargs["source_start"], date(2024, 6, 3))
        self.assertEqual(kwargs["target_start"], date(2024, 6, 10))
        self.assertEqual(kwargs["staff_ids"], [STAFF_ID])

    @patch("assignment.router.copy_week_service")
    def test_copy_week_404_empty_source(self, mock_copy):
        mock_copy.side_effect = HTTPException(status_code=404, detail="No assignments found in source week")
        resp = self.client.post(
            "/api/assignments/copy-week",
            json={"source_start_date": "2024-06-03", "target_start_date": "2024-06-10"},
        )
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "No assignments found in source week")

    def test_copy_week_422_bad_date(self):
        resp = self.client.post(
            "/api/assignments/copy-week",
            json={"source_start_date": "03/06/2024", "target_start_date": "2024-06-10"},
        )
        self.assertEqual(resp.status_code, 422)


class AssignmentRouterRoleTests(unittest.TestCase):
    """Role resolution is left real here: no header means view-only."""

    def setUp(self):
        def _fake_db():
            yield object()
        app.dependency_overrides[get_db] = _fake_db
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)

    @patch("assignment.router.service.get_assignments")
    def test_staff_role_can_read(self, mock_list):
        mock_list.return_value = []
        resp = self.client.get("/api/assignments?from=2024-06-01&to=2024-06-07")
        self.assertEqual(resp.status_code, 200)

    @patch("assignment.router.service.create_assignment")
    def test_staff_role_cannot_write(self, mock_create):
        resp = self.client.post(
            "/api/assignments",
            json={"date": "2024-06-03", "staff_id": str(STAFF_ID), "venue_id": str(VENUE_ID)},
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["detail"], "Admin role required")
        mock_create.assert_not_called()

    @patch("assignment.router.copy_week_service")
    def test_staff_role_cannot_copy_week(self, mock_copy):
        resp = self.client.post(
            "/api/assignments/copy-week",
            json={"source_start_date": "2024-06-03", "target_start_date": "2024-06-10"},
            headers={"X-Admin-Password": "wrong"},
        )
        self.assertEqual(resp.status_code, 403)
        mock_copy.assert_not_called()
