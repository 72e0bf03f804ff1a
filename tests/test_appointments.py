import asyncio

from bson import ObjectId

# Test data
test_appointment_data = {
    "appointment_id": "42",
    "title": "Checkup",
    "description": "Annual checkup",
    "date": "2024-05-01T10:00:00Z",
    "user_id": "u1",
}


def add(client, **overrides):
    response = client.post("/add-appointment", json=dict(test_appointment_data, **overrides))
    assert response.status_code == 201
    return response.json()["insertedId"]


class TestAddAppointment:

    def test_add_appointment(self, client):
        response = client.post("/add-appointment", json=test_appointment_data)
        assert response.status_code == 201

        data = response.json()
        assert data["message"] == "Appointment Added"
        assert ObjectId.is_valid(data["insertedId"])

    def test_numeric_id_stored_as_number(self, client):
        add(client)

        data = client.get("/appointment/42").json()
        assert data["appointment_id"] == 42
        assert data["date"].startswith("2024-05-01T10:00:00")

    def test_string_id_kept(self, client):
        add(client, appointment_id="abc-1")

        data = client.get("/appointment/abc-1").json()
        assert data["appointment_id"] == "abc-1"

    def test_generated_ids_are_distinct(self, client):
        """Appointments without an id get a distinct time-based one."""
        add(client, appointment_id="")
        add(client, appointment_id=None)
        payload = {k: v for k, v in test_appointment_data.items() if k != "appointment_id"}
        assert client.post("/add-appointment", json=payload).status_code == 201

        ids = [a["appointment_id"] for a in client.get("/appointments/user/u1").json()]
        assert len(ids) == 3
        assert len(set(ids)) == 3
        assert all(isinstance(i, int) for i in ids)

    def test_missing_date_stored_as_null(self, client):
        add(client, date="")
        assert client.get("/appointment/42").json()["date"] is None

    def test_unparseable_date_stored_as_null(self, client):
        add(client, date="next tuesday")
        assert client.get("/appointment/42").json()["date"] is None

    def test_add_then_list_for_user(self, client):
        response = client.post("/add-appointment", json={"title": "Checkup", "user_id": "u1"})
        assert response.status_code == 201

        titles = [a["title"] for a in client.get("/appointments/user/u1").json()]
        assert "Checkup" in titles


class TestGetAppointments:

    def test_list_for_user_without_appointments(self, client):
        response = client.get("/appointments/user/nobody")
        assert response.status_code == 200
        assert response.json() == []

    def test_list_only_matching_user(self, client):
        add(client, appointment_id=1, user_id="u1")
        add(client, appointment_id=2, user_id="u2")

        data = client.get("/appointments/user/u2").json()
        assert [a["appointment_id"] for a in data] == [2]

    def test_get_by_storage_key(self, client):
        inserted_id = add(client, appointment_id="not-an-object-id")

        response = client.get(f"/appointment/{inserted_id}")
        assert response.status_code == 200
        assert response.json()["_id"] == inserted_id

    def test_get_missing_appointment(self, client):
        response = client.get("/appointment/999")
        assert response.status_code == 404
        assert response.json() is None

    def test_numeric_lookup_prefers_numeric_record(self, client, mock_db):
        """A number-keyed record wins over a string-keyed one that looks the same."""
        add(client, appointment_id="7", title="numeric")
        # the API always stores "7" as a number, so write the string one directly
        asyncio.run(mock_db["appointments"].insert_one({"appointment_id": "7", "title": "string"}))

        assert client.get("/appointment/7").json()["title"] == "numeric"
        client.delete("/delete-appointment/7")
        assert client.get("/appointment/7").json()["title"] == "string"

    def test_string_record_not_matched_by_other_number(self, client):
        add(client, appointment_id="12abc", title="string")
        add(client, appointment_id=12, title="numeric")

        assert client.get("/appointment/12").json()["title"] == "numeric"
        assert client.get("/appointment/12abc").json()["title"] == "string"


class TestEditAppointment:

    def test_edit_then_get(self, client):
        add(client)
        edited = {
            "appointment_id": 42,
            "title": "Follow-up",
            "description": "Bloods",
            "date": "2024-06-01T09:30:00",
            "user_id": "u1",
        }

        response = client.put("/edit-appointment/42", json=edited)
        assert response.status_code == 200
        assert response.json() == {"message": "Appointment Updated"}

        data = client.get("/appointment/42").json()
        assert data["title"] == "Follow-up"
        assert data["description"] == "Bloods"
        assert data["date"].startswith("2024-06-01T09:30:00")
        assert data["user_id"] == "u1"

    def test_date_comes_back_in_utc(self, client):
        """Offsets are kept: the date is returned as the same instant in UTC."""
        add(client, appointment_id=5, date="2024-06-01T09:30:00+02:00")

        assert client.get("/appointment/5").json()["date"] == "2024-06-01T07:30:00.000Z"

        client.put("/edit-appointment/5", json={"appointment_id": 5, "date": "2024-07-01T23:15:00-04:00"})
        assert client.get("/appointment/5").json()["date"] == "2024-07-02T03:15:00.000Z"

    def test_edit_replaces_all_fields(self, client):
        """Fields left out of the body are cleared, including the id."""
        inserted_id = add(client)

        client.put("/edit-appointment/42", json={"title": "New"})

        data = client.get(f"/appointment/{inserted_id}").json()
        assert data["title"] == "New"
        assert data["appointment_id"] is None
        assert data["description"] is None
        assert data["date"] is None

    def test_edit_can_change_id(self, client):
        add(client)

        client.put("/edit-appointment/42", json={"appointment_id": "43", "title": "Moved"})

        assert client.get("/appointment/42").status_code == 404
        assert client.get("/appointment/43").json()["appointment_id"] == 43

    def test_edit_by_storage_key(self, client):
        inserted_id = add(client, appointment_id="x")

        response = client.put(f"/edit-appointment/{inserted_id}", json={"appointment_id": "x", "title": "Keyed"})
        assert response.status_code == 200
        assert client.get("/appointment/x").json()["title"] == "Keyed"

    def test_edit_missing_appointment(self, client):
        response = client.put("/edit-appointment/42", json={"title": "New"})
        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}

    def test_edit_touches_one_document(self, client):
        add(client, title="first")
        add(client, title="second")

        client.put("/edit-appointment/42", json={"appointment_id": 42, "title": "edited", "user_id": "u1"})

        titles = sorted(a["title"] for a in client.get("/appointments/user/u1").json())
        assert titles == ["edited", "second"]


class TestDeleteAppointment:

    def test_delete_appointment(self, client):
        add(client)

        response = client.delete("/delete-appointment/42")
        assert response.status_code == 200
        assert response.json() == {"message": "Appointment Deleted"}
        assert client.get("/appointment/42").status_code == 404

    def test_delete_by_storage_key(self, client):
        inserted_id = add(client, appointment_id="x")

        assert client.delete(f"/delete-appointment/{inserted_id}").status_code == 200
        assert client.get("/appointments/user/u1").json() == []

    def test_delete_missing_appointment(self, client):
        response = client.delete("/delete-appointment/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}

    def test_delete_removes_one_document(self, client):
        add(client)
        add(client)

        client.delete("/delete-appointment/42")

        assert len(client.get("/appointments/user/u1").json()) == 1
