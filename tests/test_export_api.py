"""
Tests for the CSV export endpoints
"""

import csv
import io
from datetime import datetime, timezone

from wifi_portal.services.csv_export import BOM, USER_COLUMNS, format_cell, render_csv


def parse_csv(response):
    text = response.content.decode("utf-8")
    assert text.startswith(BOM)
    return list(csv.reader(io.StringIO(text[len(BOM):])))


class TestRenderCsv:
    def test_quotes_text_and_keeps_numbers_bare(self):
        output = render_csv([{"fullName": 'Ana "La Flaca"', "familyMembers": 3}], [
            ("Nombre", lambda r: r.get("fullName")),
            ("Familia", lambda r: r.get("familyMembers")),
        ])
        assert output == BOM + '"Nombre","Familia"\r\n"Ana ""La Flaca""",3\r\n'

    def test_cell_formatting(self):
        assert format_cell(None) == ""
        assert format_cell(True) == "Sí"
        assert format_cell(["a", "b"]) == "a; b"
        assert format_cell(datetime(2024, 1, 2, 3, 4, tzinfo=timezone.utc)) == "2024-01-02T03:04:00+00:00"


class TestExportCsv:
    def test_one_row_per_listed_user(self, client, register):
        register(fullName="Ana Pérez", skills=["cocina", "costura"], location={"department": "Petén"})
        register(fullName="Luis Gómez", email="luis@example.com")

        response = client.get("/api/export/csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "attachment" in response.headers["content-disposition"]
        assert "usuarios_wifi_" in response.headers["content-disposition"]

        rows = parse_csv(response)
        header = rows[0]
        assert header == [name for name, _ in USER_COLUMNS]

        listed = client.get("/api/users").json()["data"]
        by_id = {row[header.index("ID")]: dict(zip(header, row)) for row in rows[1:]}
        assert len(rows) - 1 == len(listed) == len(by_id)
        for user in listed:
            row = by_id[user["id"]]
            assert row["Nombre Completo"] == user["fullName"]
            assert row["Email"] == user["email"]
            assert row["Código de Acceso"] == user["accessCode"]
            assert row["Departamento"] == (user.get("location") or {}).get("department", "")

        assert by_id[listed[-1]["id"]]["Habilidades"] == "cocina; costura"

    def test_filtered_export(self, client, register):
        register(migrationStatus="retornado")
        register(migrationStatus="residente")

        rows = parse_csv(client.get("/api/export/csv", params={"migrationStatus": "retornado"}))
        assert len(rows) == 2
        assert client.get("/api/export/csv", params={"status": "nope"}).status_code == 400

    def test_empty_export_has_header(self, client):
        rows = parse_csv(client.get("/api/export/csv"))
        assert len(rows) == 1


class TestExportContacts:
    def test_contact_columns_for_contactable_users(self, client, register):
        register(fullName="Ana Pérez", whatsappNumber="+502 4444 1234")
        blocked = register(fullName="Luis Gómez")["userId"]
        client.put(f"/api/user/{blocked}", json={"status": "blocked"})

        response = client.get("/api/export/contacts")
        rows = parse_csv(response)

        assert "contactos_" in response.headers["content-disposition"]
        assert rows[0][:3] == ["Nombre Completo", "Teléfono", "WhatsApp"]
        assert len(rows) == 2
        assert rows[1][0] == "Ana Pérez"
        assert rows[1][2] == "+502 4444 1234"

    def test_invalid_channel(self, client):
        assert client.get("/api/export/contacts", params={"channel": "fax"}).status_code == 400
