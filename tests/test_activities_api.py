from unittest.mock import patch

from extensions import db
from models import ActivitySubscription, Announcement, Student
from tests.base import ApiTestCase


class ActivityListTests(ApiTestCase):
    def test_list_annotates_counts_and_subscription(self):
        later = self.add_activity("Chess Tournament", days_ahead=10, max_participants=20)
        sooner = self.add_activity("Movie Night", days_ahead=2)
        self.add_activity("Last Week", days_ahead=-7)
        self.post("/activities/subscribe", {"activity_id": later}, principal_id=self.roommate_id)
        self.post("/activities/subscribe", {"activity_id": later})

        body = self.get("/activities").get_json()
        self.assertEqual(body["count"], 2)
        first, second = body["data"]
        self.assertEqual((first["id"], first["participant_count"], first["is_subscribed"]), (sooner, 0, False))
        self.assertEqual((second["id"], second["participant_count"], second["is_subscribed"]), (later, 2, True))

        other = self.get("/activities", principal_id=self.homeless_id).get_json()
        self.assertFalse(other["data"][1]["is_subscribed"])

    def test_limit(self):
        for days in (1, 2, 3):
            self.add_activity(days_ahead=days)
        body = self.get("/activities?limit=2").get_json()
        self.assertEqual(body["count"], 2)

    def test_bad_limit(self):
        self.assertEqual(self.get("/activities?limit=zero").status_code, 400)

    def test_malformed_limit_is_a_bad_request(self):
        for bad in ("²", "9" * 30):
            res = self.get(f"/activities?limit={bad}")
            self.assertEqual(res.status_code, 400, bad)
            self.assertEqual(res.get_json()["message"], "limit must be a positive integer")
        self.assertEqual(self.get("/announcements?limit=" + "9" * 30).status_code, 400)


class SubscribeTests(ApiTestCase):
    def test_subscribe(self):
        activity_id = self.add_activity(max_participants=5)
        res = self.post("/activities/subscribe", {"activity_id": activity_id})
        self.assertEqual(res.status_code, 201)
        body = res.get_json()
        self.assertEqual(body["message"], 'Successfully subscribed to "Movie Night"')
        self.assertEqual(body["data"]["activity_id"], activity_id)

    def test_missing_activity_id(self):
        self.assertEqual(self.post("/activities/subscribe", {}).status_code, 400)

    def test_malformed_activity_id_is_a_bad_request(self):
        for bad in ("²", 10**30):
            for path in ("/activities/subscribe", "/activities/unsubscribe"):
                res = self.post(path, {"activity_id": bad})
                self.assertEqual(res.status_code, 400, (path, bad))
                self.assertEqual(res.get_json()["message"], "activity_id must be a positive integer")

    def test_unknown_activity(self):
        res = self.post("/activities/subscribe", {"activity_id": 404})
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.get_json()["message"], "Activity not found")

    def test_duplicate(self):
        activity_id = self.add_activity()
        self.post("/activities/subscribe", {"activity_id": activity_id})
        res = self.post("/activities/subscribe", {"activity_id": activity_id})
        self.assertEqual(res.status_code, 409)

    def test_capacity_boundary(self):
        activity_id = self.add_activity(max_participants=2)

        # one below capacity still succeeds
        self.assertEqual(self.post("/activities/subscribe", {"activity_id": activity_id}).status_code, 201)
        self.assertEqual(
            self.post("/activities/subscribe", {"activity_id": activity_id},
                      principal_id=self.roommate_id).status_code,
            201,
        )

        res = self.post("/activities/subscribe", {"activity_id": activity_id}, principal_id=self.homeless_id)
        self.assertEqual(res.status_code, 400)
        body = res.get_json()
        self.assertEqual(body["message"], "Activity is full (2/2)")
        self.assertEqual((body["current"], body["max"]), (2, 2))

    def test_full_activity_of_fifty(self):
        activity_id = self.add_activity(max_participants=50)
        with self.app.app_context():
            for i in range(50):
                student = Student(national_id=f"29{i:012d}", full_name=f"Student {i}", password_hash="x")
                db.session.add(student)
                db.session.flush()
                db.session.add(ActivitySubscription(student_id=student.id, activity_id=activity_id))
            db.session.commit()

        res = self.post("/activities/subscribe", {"activity_id": activity_id})
        self.assertEqual(res.status_code, 400)
        self.assertIn("50/50", res.get_json()["message"])

    def test_concurrent_duplicate_is_reported_as_conflict(self):
        activity_id = self.add_activity()
        self.assertEqual(self.post("/activities/subscribe", {"activity_id": activity_id}).status_code, 201)

        # the other request passed the duplicate check before this one committed
        with patch("queries.find_subscription", return_value=None):
            res = self.post("/activities/subscribe", {"activity_id": activity_id})

        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.get_json()["message"], "Already subscribed")
        with self.app.app_context():
            self.assertEqual(ActivitySubscription.query.filter_by(activity_id=activity_id).count(), 1)

    def test_capacity_is_rechecked_at_insert(self):
        activity_id = self.add_activity(max_participants=1)
        self.post("/activities/subscribe", {"activity_id": activity_id}, principal_id=self.roommate_id)

        # stale read: the pre-check still sees a free seat
        with patch("queries.count_participants", return_value=0):
            res = self.post("/activities/subscribe", {"activity_id": activity_id})

        self.assertEqual(res.status_code, 400)
        with self.app.app_context():
            self.assertEqual(ActivitySubscription.query.filter_by(activity_id=activity_id).count(), 1)

    def test_staff_cannot_subscribe(self):
        activity_id = self.add_activity()
        res = self.client.post("/activities/subscribe", json={"activity_id": activity_id},
                               headers=self.auth(1, role="manager"))
        self.assertEqual(res.status_code, 403)


class UnsubscribeTests(ApiTestCase):
    def test_unsubscribe(self):
        activity_id = self.add_activity()
        self.post("/activities/subscribe", {"activity_id": activity_id})

        res = self.post("/activities/unsubscribe", {"activity_id": activity_id})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(self.post("/activities/unsubscribe", {"activity_id": activity_id}).status_code, 404)


class AnnouncementTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        with self.app.app_context():
            db.session.add_all([
                Announcement(title="Welcome", body="Hello", category="General"),
                Announcement(title="Water Outage", body="Friday", category="Maintenance", priority="high"),
                Announcement(title="Exams", body="Quiet hours", category="general"),
            ])
            db.session.commit()

    def test_newest_first(self):
        body = self.get("/announcements").get_json()
        self.assertEqual(body["count"], 3)
        self.assertEqual([a["title"] for a in body["data"]], ["Exams", "Water Outage", "Welcome"])

    def test_category_is_case_insensitive_and_limit_applies_after_sort(self):
        body = self.get("/announcements?category=GENERAL&limit=1").get_json()
        self.assertEqual([a["title"] for a in body["data"]], ["Exams"])
