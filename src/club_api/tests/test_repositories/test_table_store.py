from datetime import date

import pytest

from club_api.exceptions.integrity_classifier import StoreErrorCode
from club_api.models import Gender, Member


class TestInsertOne:

    async def test_insert_returns_row_with_server_defaults(self, member_store, member_payload):
        """
        Behavior:
            - insert_one() with a valid payload returns the persisted row.
        Importance:
            - id and subscription_date are filled by the database and must be
              loaded before the row is handed back.
        """
        result = await member_store.insert_one(member_payload)

        assert result.ok
        member = result.data
        assert isinstance(member.id, int)
        assert member.gender is Gender.FEMALE
        assert isinstance(member.subscription_date, date)

    async def test_unique_violation_is_a_failure_not_an_exception(self, sport_store, sport_payload):
        assert (await sport_store.insert_one(sport_payload)).ok

        result = await sport_store.insert_one(dict(sport_payload))

        assert not result.ok
        assert result.data is None
        assert result.failure.code is StoreErrorCode.UNIQUE_VIOLATION

    async def test_check_violation(self, sport_store, sport_payload):
        result = await sport_store.insert_one({**sport_payload, "subscription_price": -1})

        assert result.failure.code is StoreErrorCode.CHECK_VIOLATION

    async def test_foreign_key_violation(self, member_store, member_payload):
        result = await member_store.insert_one({**member_payload, "central_member_id": 999})

        assert result.failure.code is StoreErrorCode.FOREIGN_KEY_VIOLATION

    async def test_failed_insert_is_rolled_back(self, sport_store, sport_payload):
        await sport_store.insert_one(sport_payload)
        await sport_store.insert_one(dict(sport_payload))

        rows = (await sport_store.select()).data
        assert [s.name for s in rows] == ["Tennis"]

    async def test_unknown_column_is_a_caller_error(self, member_store, member_payload):
        with pytest.raises(ValueError, match="nickname"):
            await member_store.insert_one({**member_payload, "nickname": "Ada"})


class TestSelect:

    async def test_select_filters_and_orders_by_id(self, sport_store):
        for name, gender in [("Judo", "male"), ("Swimming", "all"), ("Karate", "male")]:
            await sport_store.insert_one({"name": name, "subscription_price": 10, "allowed_gender": gender})

        result = await sport_store.select(allowed_gender="male")

        assert result.ok
        assert [s.name for s in result.data] == ["Judo", "Karate"]

    async def test_select_with_no_match_is_empty_list(self, sport_store):
        result = await sport_store.select(name="Curling")

        assert result.ok
        assert result.data == []

    async def test_select_one_by_id_missing_row_is_no_rows(self, member_store):
        result = await member_store.select_one_by_id(12345)

        assert result.failure.code is StoreErrorCode.NO_ROWS


class TestUpdateById:

    async def test_only_patched_fields_change(self, member_store, member_payload):
        member = (await member_store.insert_one(member_payload)).data

        result = await member_store.update_by_id(member.id, {"last_name": "King"})

        assert result.ok
        updated = result.data
        assert updated.last_name == "King"
        assert updated.first_name == "Ada"
        assert updated.birthdate == date(1990, 12, 10)

    async def test_update_missing_row_is_no_rows(self, member_store):
        result = await member_store.update_by_id(404, {"last_name": "King"})

        assert result.failure.code is StoreErrorCode.NO_ROWS

    async def test_update_into_duplicate_name_is_unique_violation(self, sport_store, sport_payload):
        await sport_store.insert_one(sport_payload)
        judo_id = (await sport_store.insert_one({**sport_payload, "name": "Judo"})).data.id

        result = await sport_store.update_by_id(judo_id, {"name": "Tennis"})

        assert result.failure.code is StoreErrorCode.UNIQUE_VIOLATION
        # rollback expired every loaded row; re-read instead of touching stale objects
        reloaded = (await sport_store.select_one_by_id(judo_id)).data
        assert reloaded.name == "Judo"


class TestDelete:

    async def test_delete_by_id_returns_deleted_row(self, sport_store, sport_payload):
        sport = (await sport_store.insert_one(sport_payload)).data

        result = await sport_store.delete_by_id(sport.id)

        assert result.ok
        assert result.data.name == "Tennis"
        assert (await sport_store.select()).data == []

    async def test_delete_missing_row_is_no_rows(self, sport_store):
        result = await sport_store.delete_by_id(1)

        assert result.failure.code is StoreErrorCode.NO_ROWS

    async def test_delete_referenced_row_is_foreign_key_violation(
        self, member_store, sport_store, subscription_store, member_payload, sport_payload
    ):
        member = (await member_store.insert_one(member_payload)).data
        sport_id = (await sport_store.insert_one(sport_payload)).data.id
        await subscription_store.insert_one({"member_id": member.id, "sport_id": sport_id, "type": "group"})

        result = await sport_store.delete_by_id(sport_id)

        assert result.failure.code is StoreErrorCode.FOREIGN_KEY_VIOLATION
        assert (await sport_store.select_one_by_id(sport_id)).ok

    async def test_delete_where_matches_exact_pair(
        self, member_store, sport_store, subscription_store, member_payload, sport_payload
    ):
        member = (await member_store.insert_one(member_payload)).data
        tennis = (await sport_store.insert_one(sport_payload)).data
        judo = (await sport_store.insert_one({**sport_payload, "name": "Judo"})).data
        for sport in (tennis, judo):
            await subscription_store.insert_one({"member_id": member.id, "sport_id": sport.id, "type": "private"})

        result = await subscription_store.delete_where(member_id=member.id, sport_id=judo.id)

        assert result.ok
        assert [s.sport_id for s in result.data] == [judo.id]
        remaining = (await subscription_store.select(member_id=member.id)).data
        assert [s.sport_id for s in remaining] == [tennis.id]

    async def test_delete_where_without_match_is_empty_list(self, subscription_store):
        result = await subscription_store.delete_where(member_id=1, sport_id=1)

        assert result.ok
        assert result.data == []

    async def test_delete_where_requires_a_filter(self, subscription_store):
        with pytest.raises(ValueError):
            await subscription_store.delete_where()
