import shutil
import tempfile
import unittest

from fastapi.testclient import TestClient

from homepantry.api.api_run import app
from homepantry.api.dependencies import get_store
from homepantry.events.web_observers import get_events, start as start_observers
from homepantry.infra.Document_Store import DocumentStore

HOME = "smith-family"


class TestPlannerAPI(unittest.TestCase):

    def setUp(self):
        self.data_dir = tempfile.mkdtemp()
        app.dependency_overrides[get_store] = lambda: DocumentStore(self.data_dir)
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        shutil.rmtree(self.data_dir, ignore_errors=True)

    def _create(self, date="2025-03-14", meal_type="dinner", planned=None):
        body = {"date": date, "mealType": meal_type}
        if planned is not None:
            body["planned"] = planned
        return self.client.post(f'/api/planner/{HOME}', json=body)

    def _transition(self, plan_id, action, payload=None):
        return self.client.post(f'/api/planner/{HOME}/{plan_id}/transition',
                                json={"action": action, "payload": payload})

    def test_create_complete_revert(self):
        resp = self._create(planned={"recipeName": "Lasagna"})
        self.assertEqual(resp.status_code, 201)
        meal = resp.json()
        self.assertEqual(meal['state'], 'planned')
        self.assertIn('complete-as-planned', meal['allowedActions'])

        resp = self._transition(meal['id'], 'complete-as-planned')
        self.assertEqual(resp.status_code, 200)
        done = resp.json()
        self.assertTrue(done['completed'])
        self.assertEqual(done['completionType'], 'as-planned')
        self.assertEqual(done['actual']['description'], 'Lasagna')

        resp = self._transition(meal['id'], 'revert-to-planned')
        reverted = resp.json()
        self.assertEqual(reverted['state'], 'planned')
        self.assertEqual(reverted['planned']['recipeName'], 'Lasagna')
        self.assertNotIn('actual', reverted)

    def test_events_for_completion(self):
        start_observers()
        cursor = get_events()['next_cursor']
        meal = self._create(planned={"recipeName": "Soup"}).json()
        self._transition(meal['id'], 'complete-with-substitution', {"description": "Cereal"})
        events = get_events(cursor)['events']
        self.assertEqual([e['type'] for e in events], ['meal.completed'])
        self.assertEqual(events[0]['completion_type'], 'modified')

    def test_duplicate_slot_conflicts(self):
        self.assertEqual(self._create().status_code, 201)
        resp = self._create(planned="Tacos")
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()['kind'], 'guard_violation')

    def test_guard_violation(self):
        meal = self._create().json()
        self.assertEqual(meal['state'], 'empty')
        resp = self._transition(meal['id'], 'complete-as-planned')
        self.assertEqual(resp.status_code, 409)
        stored = self.client.get(f'/api/planner/{HOME}').json()['meals'][0]
        self.assertEqual(stored['state'], 'empty')

    def test_blank_substitution(self):
        meal = self._create(planned={"recipeName": "Lasagna"}).json()
        resp = self._transition(meal['id'], 'complete-with-substitution', {"description": " "})
        self.assertEqual(resp.status_code, 400)

    def test_unknown_action(self):
        meal = self._create().json()
        self.assertEqual(self._transition(meal['id'], 'eat').status_code, 400)

    def test_missing_record(self):
        self.assertEqual(self._transition('nope', 'delete').status_code, 404)
        self.assertEqual(self.client.delete(f'/api/planner/{HOME}/nope').status_code, 404)

    def test_log_meal(self):
        resp = self.client.post(f'/api/planner/{HOME}/log-meal',
                                json={"date": "2025-03-14", "mealType": "lunch", "description": "Sandwich"})
        self.assertEqual(resp.status_code, 201)
        meal = resp.json()
        self.assertEqual(meal['completionType'], 'modified')
        self.assertIsNone(meal['planned'])
        self.assertNotIn('revert-to-planned', meal['allowedActions'])

        resp = self.client.post(f'/api/planner/{HOME}/log-meal',
                                json={"date": "2025-03-14", "mealType": "lunch", "description": "Soup"})
        self.assertEqual(resp.status_code, 409)

    def test_log_meal_reuses_empty_slot(self):
        empty = self._create(meal_type="breakfast").json()
        logged = self.client.post(f'/api/planner/{HOME}/log-meal',
                                  json={"date": "2025-03-14", "mealType": "breakfast", "description": "Toast"}).json()
        self.assertEqual(logged['id'], empty['id'])
        self.assertEqual(len(self.client.get(f'/api/planner/{HOME}').json()['meals']), 1)

    def test_range_query_is_sorted(self):
        self._create(date="2025-03-16", meal_type="lunch")
        self._create(date="2025-03-14", meal_type="dinner")
        self._create(date="2025-03-14", meal_type="breakfast")
        self._create(date="2025-03-20", meal_type="lunch")
        meals = self.client.get(f'/api/planner/{HOME}',
                                params={'startDate': '2025-03-14', 'endDate': '2025-03-16'}).json()['meals']
        self.assertEqual([(m['date'], m['mealType']) for m in meals],
                         [('2025-03-14', 'breakfast'), ('2025-03-14', 'dinner'), ('2025-03-16', 'lunch')])

    def test_bad_range(self):
        resp = self.client.get(f'/api/planner/{HOME}', params={'startDate': '2025-03-16', 'endDate': '2025-03-14'})
        self.assertEqual(resp.status_code, 400)

    def test_delete(self):
        meal = self._create(planned="Curry").json()
        self.assertEqual(self.client.delete(f'/api/planner/{HOME}/{meal["id"]}').status_code, 200)
        self.assertEqual(self.client.get(f'/api/planner/{HOME}').json()['count'], 0)

    def test_delete_through_transition(self):
        meal = self._create(planned="Curry").json()
        resp = self._transition(meal['id'], 'delete')
        self.assertEqual(resp.json(), {"deleted": True, "id": meal['id']})


if __name__ == '__main__':
    unittest.main()
