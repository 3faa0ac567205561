"""
Tests for the partial-update fragment builder.
"""

import logging

import pytest

from jobly.core.errors import BadRequestError
from jobly.crud import company as company_crud
from jobly.helpers.sql import sql_for_partial_update


class TestSqlForPartialUpdate:

    def test_maps_fields_to_columns(self):
        data = {"firstName": "Aliya", "age": 32}
        js_to_sql = {"firstName": "first_name", "lastName": "last_name", "isAdmin": "is_admin"}

        result = sql_for_partial_update(data, js_to_sql)

        assert result.set_cols == '"first_name"=$1, "age"=$2'
        assert result.values == ["Aliya", 32]

    def test_columns_follow_input_order(self):
        data = {"logoUrl": "http://x.img", "name": "Acme", "numEmployees": 5}
        js_to_sql = {"numEmployees": "num_employees", "logoUrl": "logo_url"}

        result = sql_for_partial_update(data, js_to_sql)

        assert result.set_cols == '"logo_url"=$1, "name"=$2, "num_employees"=$3'
        assert list(result.columns.items()) == [
            ("logo_url", "http://x.img"),
            ("name", "Acme"),
            ("num_employees", 5),
        ]

    def test_none_values_are_kept(self):
        result = sql_for_partial_update({"equity": None})

        assert result.set_cols == '"equity"=$1'
        assert result.values == [None]
        assert result.columns == {"equity": None}

    def test_no_mapping_uses_field_names(self):
        result = sql_for_partial_update({"title": "boss"})
        assert result.set_cols == '"title"=$1'

    def test_no_data_raises(self):
        with pytest.raises(BadRequestError) as exc_info:
            sql_for_partial_update({}, {"firstName": "first_name"})

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "No data"


class TestPartialUpdateThroughCrud:

    def test_update_applies_columns_and_logs_field_names(self, db_session, seed_data, caplog):
        caplog.set_level(logging.INFO, logger="jobly.crud.company")

        company = company_crud.update(db_session, "c1", {"numEmployees": 42, "logoUrl": None})

        assert company.num_employees == 42
        assert company.logo_url is None
        messages = [r.getMessage() for r in caplog.records if r.name == "jobly.crud.company"]
        assert messages == ["Updated company c1: num_employees, logo_url"]
