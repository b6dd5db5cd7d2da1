from datetime import date, timedelta

from extensions import db
from models import Complaint, MaintenanceRequest, PermissionRequest
from tests.base import ApiTestCase


class ComplaintTests(ApiTestCase):
    def test_submit_complaint(self):
        res = self.post("/services/complaints", {
            "title": "Noise Complaint",
            "description": "Loud noise from neighbouring room",
            "type": "general",
        })
        self.assertEqual(res.status_code, 201)
        data = res.get_json()["data"]
        self.assertEqual(data["status"], "pending")
        self.assertFalse(data["is_secret"])
        self.assertIsNone(data["admin_reply"])
        self.assertEqual(data["student_id"], self.student_id)

    def test_invalid_complaint_is_not_stored(self):
        res = self.post("/services/complaints", {"title": "x", "description": "y", "type": "loud"})
        self.assertEqual(res.status_code, 400)
        self.assertIn("general, urgent", res.get_json()["message"])
        with self.app.app_context():
            self.assertEqual(Complaint.query.count(), 0)

    def test_missing_fields(self):
        res = self.post("/services/complaints", {"title": "Only a title"})
        self.assertEqual(res.status_code, 400)
        self.assertIn("description", res.get_json()["message"])

    def test_list_is_scoped_and_filtered(self):
        self.post("/services/complaints", {"title": "A", "description": "a", "type": "general"})
        self.post("/services/complaints", {"title": "B", "description": "b", "type": "urgent"})
        self.post("/services/complaints", {"title": "C", "description": "c", "type": "urgent"},
                  principal_id=self.roommate_id)

        body = self.get("/services/complaints").get_json()
        self.assertEqual(body["count"], 2)
        self.assertEqual([c["title"] for c in body["data"]], ["B", "A"])

        urgent = self.get("/services/complaints?type=urgent").get_json()
        self.assertEqual([c["title"] for c in urgent["data"]], ["B"])

        resolved = self.get("/services/complaints?status=resolved&type=urgent").get_json()
        self.assertEqual(resolved["count"], 0)

    def test_bad_filter_value(self):
        res = self.get("/services/complaints?status=closed")
        self.assertEqual(res.status_code, 400)


class MaintenanceTests(ApiTestCase):
    def test_requires_room(self):
        res = self.post("/services/maintenance", {"category": "plumbing", "description": "Leak"},
                        principal_id=self.homeless_id)
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.get_json()["message"], "Student is not assigned to a room")

        res = self.get("/services/maintenance", principal_id=self.homeless_id)
        self.assertEqual(res.status_code, 404)

    def test_submit_opens_request_for_room(self):
        res = self.post("/services/maintenance", {"category": "Electric", "description": "Bulb broken"})
        self.assertEqual(res.status_code, 201)
        data = res.get_json()["data"]
        self.assertEqual((data["category"], data["status"], data["room_id"]), ("electric", "open", self.room_id))
        self.assertIsNone(data["supervisor_reply"])

    def test_roommates_share_the_list(self):
        self.post("/services/maintenance", {"category": "net", "description": "Wi-Fi down"})
        self.post("/services/maintenance", {"category": "furniture", "description": "Broken chair"},
                  principal_id=self.roommate_id)

        body = self.get("/services/maintenance").get_json()
        self.assertEqual(body["count"], 2)

        only_net = self.get("/services/maintenance?category=net", principal_id=self.roommate_id).get_json()
        self.assertEqual([m["description"] for m in only_net["data"]], ["Wi-Fi down"])

    def test_unknown_category(self):
        res = self.post("/services/maintenance", {"category": "roof", "description": "Leak"})
        self.assertEqual(res.status_code, 400)
        with self.app.app_context():
            self.assertEqual(MaintenanceRequest.query.count(), 0)


class PermissionTests(ApiTestCase):
    def days(self, n):
        return (date.today() + timedelta(days=n)).isoformat()

    def test_submit_permission(self):
        res = self.post("/services/permissions", {
            "type": "travel", "start_date": self.days(3), "end_date": self.days(5), "reason": "Family visit",
        })
        self.assertEqual(res.status_code, 201)
        data = res.get_json()["data"]
        self.assertEqual(data["status"], "pending")
        self.assertEqual(data["start_date"], self.days(3))

    def test_end_before_start_is_rejected_and_not_stored(self):
        res = self.post("/services/permissions", {
            "type": "late", "start_date": self.days(5), "end_date": self.days(3), "reason": "x",
        })
        self.assertEqual(res.status_code, 400)
        with self.app.app_context():
            self.assertEqual(PermissionRequest.query.count(), 0)

    def test_start_today_is_rejected(self):
        res = self.post("/services/permissions", {
            "type": "late", "start_date": self.days(0), "end_date": self.days(1), "reason": "x",
        })
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.get_json()["message"], "start_date must be in the future")

    def test_sorted_by_start_date_ascending(self):
        with self.app.app_context():
            for start in (10, 2, 6):
                db.session.add(PermissionRequest(
                    student_id=self.student_id, type="late", reason="r",
                    start_date=date.today() + timedelta(days=start),
                    end_date=date.today() + timedelta(days=start + 1),
                ))
            db.session.commit()

        body = self.get("/services/permissions").get_json()
        self.assertEqual([p["start_date"] for p in body["data"]], [self.days(2), self.days(6), self.days(10)])


class RequestBodyTests(ApiTestCase):
    def test_non_object_body(self):
        res = self.post("/services/complaints", ["title", "description"])
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.get_json()["message"], "Request body must be a JSON object")
