"""Test the generic record CRUD routes."""

from __future__ import annotations

import uuid

import pytest
from httpx import AsyncClient

from .conftest import TENANT_B


async def _add_field(client: AsyncClient, **kwargs) -> dict:
    payload = {"objectType": "deal", "fieldType": "text", **kwargs}
    resp = await client.post("/crm/custom-fields", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.asyncio
async def test_company_crud_round_trip(client: AsyncClient):
    resp = await client.post("/crm/companies", json={"name": "Acme", "domain": "acme.io"})
    assert resp.status_code == 201
    company = resp.json()
    assert company["name"] == "Acme"
    assert company["tenantId"] == "tenant-a"
    assert company["customFields"] == {}

    resp = await client.get(f"/crm/companies/{company['id']}")
    assert resp.status_code == 200
    assert resp.json()["domain"] == "acme.io"

    resp = await client.put(f"/crm/companies/{company['id']}", json={"industry": "Robotics"})
    assert resp.status_code == 200
    assert resp.json()["industry"] == "Robotics"
    assert resp.json()["domain"] == "acme.io"

    resp = await client.delete(f"/crm/companies/{company['id']}")
    assert resp.status_code == 204
    resp = await client.get(f"/crm/companies/{company['id']}")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Record not found"}


@pytest.mark.asyncio
async def test_records_are_invisible_to_other_tenants(client: AsyncClient):
    resp = await client.post("/crm/contacts", json={"firstName": "Ada", "email": "ada@x.io"})
    contact_id = resp.json()["id"]
    other = {"X-Tenant-ID": TENANT_B}

    assert (await client.get(f"/crm/contacts/{contact_id}", headers=other)).status_code == 404
    resp = await client.put(f"/crm/contacts/{contact_id}", json={"lastName": "X"}, headers=other)
    assert resp.status_code == 404
    assert (await client.delete(f"/crm/contacts/{contact_id}", headers=other)).status_code == 404

    listing = (await client.get("/crm/contacts", headers=other)).json()
    assert listing["data"] == []
    assert listing["pagination"]["total"] == 0

    assert (await client.get(f"/crm/contacts/{contact_id}")).status_code == 200


@pytest.mark.asyncio
async def test_malformed_id_is_not_found(client: AsyncClient):
    resp = await client.get("/crm/deals/not-a-uuid")
    assert resp.status_code == 404
    resp = await client.delete("/crm/tasks/123")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_schema_errors_are_bad_requests(client: AsyncClient):
    resp = await client.post("/crm/deals", json={"amount": 5})
    assert resp.status_code == 400
    assert "name" in resp.json()["detail"]

    resp = await client.post("/crm/deals", content=b"[1, 2]",
                             headers={"Content-Type": "application/json"})
    assert resp.status_code == 400

    deal = (await client.post("/crm/deals", json={"name": "Pilot"})).json()
    resp = await client.put(f"/crm/deals/{deal['id']}", json={"name": None})
    assert resp.status_code == 400

    resp = await client.get("/crm/deals", params={"pageSize": 500})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_required_custom_field_enforced_on_create(client: AsyncClient):
    await _add_field(
        client,
        fieldKey="renewal_risk",
        fieldLabel="Renewal Risk",
        fieldType="select",
        required=True,
        options=[{"label": "Low", "value": "low"}, {"label": "High", "value": "high"}],
    )

    resp = await client.post("/crm/deals", json={"name": "Renewal"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == 'Custom field "Renewal Risk" is required'

    resp = await client.post(
        "/crm/deals", json={"name": "Renewal", "customFields": {"renewal_risk": "medium"}}
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid value for Renewal Risk: must be one of: low, high"

    resp = await client.post(
        "/crm/deals", json={"name": "Renewal", "customFields": {"renewal_risk": "low"}}
    )
    assert resp.status_code == 201
    assert resp.json()["customFields"] == {"renewal_risk": "low"}


@pytest.mark.asyncio
async def test_default_value_applied_on_create(client: AsyncClient):
    await _add_field(client, fieldKey="channel", fieldLabel="Channel", defaultValue="web")
    resp = await client.post("/crm/deals", json={"name": "Inbound"})
    assert resp.status_code == 201
    assert resp.json()["customFields"] == {"channel": "web"}


@pytest.mark.asyncio
async def test_unknown_custom_field_rejected(client: AsyncClient):
    resp = await client.post(
        "/crm/companies", json={"name": "Acme", "customFields": {"shoe_size": 42}}
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == 'Unknown custom field "shoe_size" for company'


@pytest.mark.asyncio
async def test_update_merges_custom_fields(client: AsyncClient):
    await _add_field(client, fieldKey="region", fieldLabel="Region")
    await _add_field(client, fieldKey="score", fieldLabel="Score", fieldType="number")

    deal = (await client.post(
        "/crm/deals", json={"name": "Pilot", "customFields": {"region": "emea"}}
    )).json()

    resp = await client.put(f"/crm/deals/{deal['id']}", json={"customFields": {"score": "9"}})
    assert resp.status_code == 200
    assert resp.json()["customFields"] == {"region": "emea", "score": 9}

    resp = await client.put(f"/crm/deals/{deal['id']}", json={"customFields": {"region": None}})
    assert resp.json()["customFields"] == {"region": None, "score": 9}

    resp = await client.put(f"/crm/deals/{deal['id']}", json={"customFields": {"nope": 1}})
    assert resp.status_code == 400
    stored = (await client.get(f"/crm/deals/{deal['id']}")).json()
    assert stored["customFields"] == {"region": None, "score": 9}


@pytest.mark.asyncio
async def test_update_without_custom_fields_skips_required_check(client: AsyncClient):
    deal = (await client.post("/crm/deals", json={"name": "Legacy"})).json()
    await _add_field(client, fieldKey="tier", fieldLabel="Tier", required=True)

    resp = await client.put(f"/crm/deals/{deal['id']}", json={"stage": "proposal"})
    assert resp.status_code == 200
    assert resp.json()["stage"] == "proposal"
    assert resp.json()["customFields"] == {}


@pytest.mark.asyncio
async def test_deal_search_and_pagination(client: AsyncClient):
    deals = [
        {"name": "Acme expansion"},
        {"name": "Acme renewal"},
        {"name": "Globex pilot", "source": "acme partner"},
        {"name": "Initech trial", "status": "ACME-hold"},
        {"name": "Hooli intro", "stage": "acme_review"},
        {"name": "Umbrella pilot"},
    ]
    for payload in deals:
        resp = await client.post("/crm/deals", json=payload)
        assert resp.status_code == 201

    resp = await client.get("/crm/deals", params={"search": "ACME", "pageSize": 2})
    body = resp.json()
    assert resp.status_code == 200
    assert len(body["data"]) == 2
    assert body["pagination"] == {"page": 1, "pageSize": 2, "total": 5, "totalPages": 3}

    body = (await client.get(
        "/crm/deals", params={"search": "acme", "pageSize": 2, "page": 3}
    )).json()
    assert len(body["data"]) == 1
    assert body["pagination"]["total"] == 5

    body = (await client.get("/crm/deals", params={"search": "nothing-matches"})).json()
    assert body["pagination"] == {"page": 1, "pageSize": 25, "total": 0, "totalPages": 0}


@pytest.mark.asyncio
async def test_deals_default_to_most_recently_updated(client: AsyncClient):
    first = (await client.post("/crm/deals", json={"name": "First"})).json()
    await client.post("/crm/deals", json={"name": "Second"})
    await client.put(f"/crm/deals/{first['id']}", json={"amount": 10})

    names = [d["name"] for d in (await client.get("/crm/deals")).json()["data"]]
    assert names == ["First", "Second"]

    names = [d["name"] for d in (await client.get(
        "/crm/deals", params={"sort": "updatedAt", "direction": "asc"}
    )).json()["data"]]
    assert names == ["Second", "First"]


@pytest.mark.asyncio
async def test_activity_links_and_no_updated_at(client: AsyncClient):
    deal = (await client.post("/crm/deals", json={"name": "Linked"})).json()
    resp = await client.post(
        "/crm/phone-calls",
        json={"subject": "Discovery", "callType": "inbound", "dealId": deal["id"]},
    )
    assert resp.status_code == 201
    call = resp.json()
    assert call["dealId"] == deal["id"]
    assert "updatedAt" not in call

    resp = await client.post("/crm/emails", json={"subject": "Hi", "direction": "sideways"})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_unknown_record_id_update(client: AsyncClient):
    resp = await client.put(f"/crm/meetings/{uuid.uuid4()}", json={"title": "x"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_page_far_beyond_the_data(client: AsyncClient):
    await client.post("/crm/deals", json={"name": "Only"})

    body = (await client.get("/crm/deals", params={"page": 10_000_000, "pageSize": 100})).json()
    assert body["data"] == []
    assert body["pagination"]["total"] == 1

    resp = await client.get("/crm/deals", params={"page": 10**30})
    assert resp.status_code == 400
    assert "page" in resp.json()["detail"]
