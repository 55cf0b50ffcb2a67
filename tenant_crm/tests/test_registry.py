"""Entity registry tests."""

from __future__ import annotations

import pytest

from tenant_crm.enums import ObjectType
from tenant_crm.registry import ENTITY_CONFIGS, ENTITY_CONFIGS_BY_TYPE, get_entity_config


def test_every_object_type_is_registered_once():
    assert {c.object_type for c in ENTITY_CONFIGS} == set(ObjectType)
    assert len({c.base_path for c in ENTITY_CONFIGS}) == len(ENTITY_CONFIGS)
    assert len(ENTITY_CONFIGS_BY_TYPE) == len(ObjectType)


@pytest.mark.parametrize("config", ENTITY_CONFIGS, ids=lambda c: c.base_path)
def test_config_columns_exist_on_model(config):
    for name in (*config.search_columns, config.default_sort, "tenant_id", "custom_fields"):
        assert config.has_column(name), f"{config.model.__name__}.{name}"


def test_only_mutable_records_track_updates():
    no_updates = {c.object_type for c in ENTITY_CONFIGS if not c.has_updated_at}
    assert no_updates == {ObjectType.EMAIL, ObjectType.PHONE_CALL}


def test_lookup_by_object_type():
    assert get_entity_config("phone_call").base_path == "phone-calls"
    assert get_entity_config(ObjectType.DEAL).default_sort == "updated_at"
    with pytest.raises(KeyError):
        get_entity_config("widget")
