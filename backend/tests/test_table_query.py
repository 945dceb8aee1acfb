import pytest

from athletic_balance.core.errors import AppError
from athletic_balance.db.query import TableClient


def test_select_with_columns_and_filter(db_session):
    result = (
        TableClient(db_session)
        .table("coaches")
        .select("id, name")
        .eq("id", "coach-fuel")
        .execute()
    )
    assert result.ok
    assert len(result.data) == 1
    assert set(result.data[0]) == {"id", "name"}


def test_order_and_limit(db_session):
    result = TableClient(db_session).table("coaches").select("id").order("id", ascending=True).limit(3).execute()
    ids = [row["id"] for row in result.data]
    assert len(ids) == 3
    assert ids == sorted(ids)


def test_conditions_are_combined(db_session):
    result = (
        TableClient(db_session)
        .table("coaches")
        .select()
        .eq("id", "coach-fuel")
        .eq("name", "somebody else")
        .execute()
    )
    assert result.data == []


def test_insert_upsert_update_delete_cycle(db_session):
    coaches = TableClient(db_session)
    inserted = coaches.table("coaches").insert({"id": "coach-temp", "name": "Temp"}).execute()
    assert inserted.data["name"] == "Temp"

    upserted = (
        coaches.table("coaches")
        .upsert({"id": "coach-temp", "name": "Temp", "tagline": "Fresh"})
        .execute()
    )
    assert upserted.data["tagline"] == "Fresh"

    updated = coaches.table("coaches").update({"emoji": "🔥"}).eq("id", "coach-temp").execute()
    assert [row["emoji"] for row in updated.data] == ["🔥"]

    removed = coaches.table("coaches").delete().eq("id", "coach-temp").execute()
    assert [row["id"] for row in removed.data] == ["coach-temp"]
    assert coaches.table("coaches").select().eq("id", "coach-temp").execute().data == []


def test_duplicate_insert_returns_error(db_session):
    result = TableClient(db_session).table("coaches").insert({"id": "coach-fuel", "name": "Again"}).execute()
    assert not result.ok
    assert result.error


def test_unknown_table_and_column():
    client = TableClient(db=None)
    with pytest.raises(AppError) as missing_table:
        client.table("nope")
    assert missing_table.value.status_code == 404

    with pytest.raises(AppError) as missing_column:
        client.table("coaches").eq("password", "x")
    assert missing_column.value.status_code == 400


def test_allow_list_hides_tables():
    with pytest.raises(AppError) as exc:
        TableClient(db=None, allowed_tables={"coaches"}).table("users")
    assert exc.value.status_code == 404


@pytest.mark.parametrize("operation", ["update", "delete"])
def test_write_without_condition_is_rejected(db_session, operation):
    query = TableClient(db_session).table("coaches")
    query = query.update({"name": "x"}) if operation == "update" else query.delete()
    with pytest.raises(AppError) as exc:
        query.execute()
    assert exc.value.status_code == 400
    assert exc.value.message == f"No condition provided for {operation}"
