import os
import shutil
import tempfile
import unittest

from fastapi.testclient import TestClient

from homepantry.api.api_run import app
from homepantry.api.dependencies import get_store
from homepantry.infra.Document_Store import DocumentStore
from homepantry.infra.paths import PANTRY_COLLECTION, collection_file

HOME = "smith-family"


class TestPantryAPI(unittest.TestCase):

    def setUp(self):
        self.data_dir = tempfile.mkdtemp()
        app.dependency_overrides[get_store] = lambda: DocumentStore(self.data_dir)
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        shutil.rmtree(self.data_dir, ignore_errors=True)

    def _add(self, **body):
        resp = self.client.post(f'/api/pantry/{HOME}', json=body)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def test_empty_pantry(self):
        resp = self.client.get(f'/api/pantry/{HOME}')
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data['total'], 0)
        self.assertEqual(data['groupBy'], 'location')
        self.assertEqual(data['groups'], {'order': [], 'groups': {}})

    def test_add_and_group_by_location(self):
        milk = self._add(name="Milk", location="fridge", daysUntilExpiry=5)
        self._add(name="Rice")
        self.assertEqual(milk['expiry']['category'], 'expiring-soon')
        self.assertIn('createdAt', milk)

        data = self.client.get(f'/api/pantry/{HOME}').json()
        self.assertEqual(data['total'], 2)
        self.assertEqual(data['groups']['order'], ['pantry', 'fridge'])
        self.assertEqual(data['expiringSoon'][0]['name'], 'Milk')

    def test_group_by_expiration_and_filters(self):
        self._add(name="Milk", location="fridge", daysUntilExpiry=2)
        self._add(name="Honey", daysUntilExpiry=365)
        self._add(name="Salt")
        data = self.client.get(f'/api/pantry/{HOME}', params={'group_by': 'expiration'}).json()
        self.assertEqual(data['groups']['order'], ['expiring-soon', 'fresh', 'unknown'])

        data = self.client.get(f'/api/pantry/{HOME}', params={'status': 'fresh'}).json()
        self.assertEqual(data['count'], 1)
        data = self.client.get(f'/api/pantry/{HOME}', params={'location': 'fridge,freezer'}).json()
        self.assertEqual(data['count'], 1)
        data = self.client.get(f'/api/pantry/{HOME}', params={'search': 'HON'}).json()
        self.assertEqual(data['count'], 1)

    def test_unknown_group_by_is_rejected(self):
        resp = self.client.get(f'/api/pantry/{HOME}', params={'group_by': 'colour'})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()['kind'], 'invalid_input')

    def test_invalid_location_is_rejected(self):
        resp = self.client.post(f'/api/pantry/{HOME}', json={"name": "Milk", "location": "garage"})
        self.assertEqual(resp.status_code, 400)

    def test_negative_shelf_life_is_rejected(self):
        resp = self.client.post(f'/api/pantry/{HOME}', json={"name": "Milk", "daysUntilExpiry": -1})
        self.assertEqual(resp.status_code, 422)

    def test_update_and_delete(self):
        item = self._add(name="Milk", location="fridge")
        resp = self.client.put(f'/api/pantry/{HOME}/{item["id"]}', json={"quantity": "2 l", "daysUntilExpiry": 10})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['quantity'], '2 l')
        self.assertEqual(resp.json()['expiry']['category'], 'fresh')
        self.assertEqual(resp.json()['location'], 'fridge')

        resp = self.client.delete(f'/api/pantry/{HOME}/{item["id"]}')
        self.assertEqual(resp.status_code, 200)
        resp = self.client.delete(f'/api/pantry/{HOME}/{item["id"]}')
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()['kind'], 'not_found')

    def test_export(self):
        self._add(name="Milk", location="fridge", daysUntilExpiry=3)
        export = self.client.get(f'/api/pantry/{HOME}/export').json()
        self.assertEqual(export['totalItems'], 1)
        self.assertEqual(export['exportSource'], 'homepantry')
        self.assertEqual(export['items'][0]['expiry']['urgent'], True)

    def test_scan_publishes_alerts(self):
        self._add(name="Milk", location="fridge", daysUntilExpiry=1)
        self._add(name="Rice", daysUntilExpiry=300)
        data = self.client.post(f'/api/pantry/{HOME}/scan').json()
        self.assertEqual(data['flagged'], 1)

    def test_households_are_separate(self):
        self._add(name="Milk")
        data = self.client.get('/api/pantry/other-home').json()
        self.assertEqual(data['total'], 0)

    def test_invalid_household_id(self):
        resp = self.client.get('/api/pantry/bad.home')
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()['kind'], 'invalid_input')

    def test_unreadable_collection_is_reported(self):
        path = collection_file(self.data_dir, HOME, PANTRY_COLLECTION)
        os.makedirs(path.parent)
        path.write_text("[{broken", encoding="utf-8")
        resp = self.client.get(f'/api/pantry/{HOME}')
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()['kind'], 'storage_error')


if __name__ == '__main__':
    unittest.main()
