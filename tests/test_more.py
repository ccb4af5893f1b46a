import copy
import pickle
import pytest
from embedded_json_db import Database, Model, Record, ValidationError

def make_db(tmp_path):
    db_path = tmp_path / "db.json"
    db_path.write_text("", encoding="utf-8")
    return Database(str(db_path))

def test_insert_one_then_find_by_id(tmp_path):
    model = Model(make_db(tmp_path), "testTable")
    record = {"name": "John Doe"}
    rid = model.insert_one(record)
    assert isinstance(rid, str) and rid
    assert model.find_by_id(rid) == {"id": rid, "name": "John Doe"}
    # Caller's dict is copied, not aliased
    assert record == {"name": "John Doe"}

def test_insert_one_overrides_given_id(tmp_path):
    model = make_db(tmp_path).model("T")
    rid = model.insert_one({"id": "mine", "a": 1})
    assert rid != "mine"
    assert model.find_by_id("mine") is None
    assert model.find_by_id(rid) == {"id": rid, "a": 1}

def test_insert_many(tmp_path):
    model = make_db(tmp_path).model("testTable")
    records = [{"name": "John Doe"}, {"name": "Jane Doe"}, {"name": "John Dough"}]
    assert model.insert_many(records) is None
    got = model.find_many({})
    assert [{k: v for k, v in r.items() if k != "id"} for r in got] == records
    ids = [r.id for r in got]
    assert all(isinstance(i, str) and i for i in ids)
    assert len(set(ids)) == 3
    for r in got:
        assert model.find_by_id(r.id) is r

def test_update_one_by_id(tmp_path):
    model = make_db(tmp_path).model("T")
    rid = model.insert_one({"name": "John Doe", "age": 30})
    assert model.update_one_by_id(rid, {"name": "Not John Doe", "city": "Oslo"}) is True
    assert model.find_by_id(rid) == {"id": rid, "name": "Not John Doe", "age": 30, "city": "Oslo"}

def test_update_unknown_id(tmp_path):
    model = make_db(tmp_path).model("T")
    model.insert_one({"a": 1})
    assert model.update_one_by_id("nope", {"a": 2}) is False
    assert model.find_one({})["a"] == 1

def test_update_cannot_change_id(tmp_path):
    model = make_db(tmp_path).model("T")
    rid = model.insert_one({"a": 1})
    # Same id is accepted as a no-op
    assert model.update_one_by_id(rid, {"id": rid, "a": 2}) is True
    with pytest.raises(ValidationError):
        model.update_one_by_id(rid, {"id": "other", "a": 3})
    # Nothing applied from the rejected update
    assert model.find_by_id(rid) == {"id": rid, "a": 2}

def test_delete_one_by_id_rebuilds_index(tmp_path):
    model = make_db(tmp_path).model("T")
    ids = [model.insert_one({"n": i}) for i in range(5)]
    removed = model.delete_one_by_id(ids[1])
    assert removed == {"id": ids[1], "n": 1}
    assert model.find_by_id(ids[1]) is None
    assert len(model) == 4
    for i in (0, 2, 3, 4):
        assert model.find_by_id(ids[i])["n"] == i
    # Relative order of the rest is preserved
    assert [r["n"] for r in model.find_many({})] == [0, 2, 3, 4]
    assert model.delete_one_by_id(ids[1]) is None

def test_delete_one_by_query(tmp_path):
    model = make_db(tmp_path).model("T")
    a = model.insert_one({"kind": "x", "n": 1})
    b = model.insert_one({"kind": "y", "n": 2})
    c = model.insert_one({"kind": "x", "n": 3})
    removed = model.delete_one({"kind": "x"})
    assert removed.id == a
    assert model.find_by_id(a) is None
    assert model.find_by_id(b)["n"] == 2
    assert model.find_by_id(c)["n"] == 3
    assert model.delete_one({"kind": "z"}) is None
    # Update after delete lands on the right record
    assert model.update_one_by_id(c, {"n": 30}) is True
    assert model.find_one({"kind": "x"})["n"] == 30

def test_models_share_table(tmp_path):
    db = make_db(tmp_path)
    m1 = db.model("Users")
    m2 = Model(db, "Users")
    rid = m1.insert_one({"name": "A"})
    other = m1.insert_one({"name": "B"})
    assert m2.find_by_id(rid)["name"] == "A"
    m2.delete_one_by_id(rid)
    # The index is per table, so m1 sees the shifted positions
    assert m1.find_by_id(rid) is None
    assert m1.find_by_id(other)["name"] == "B"

def test_tables_are_independent(tmp_path):
    db = make_db(tmp_path)
    rid = db.model("A").insert_one({"v": 1})
    assert db.model("B").find_by_id(rid) is None

def test_loaded_records_are_indexed(tmp_path):
    db_path = tmp_path / "db.json"
    db_path.write_text('{"Users": [{"id": "u1", "name": "A"}, {"id": "u2", "name": "B"}]}', encoding="utf-8")
    m = Database(str(db_path)).model("Users")
    assert m.find_by_id("u2") == {"id": "u2", "name": "B"}
    assert m.update_one_by_id("u1", {"name": "AA"}) is True
    assert m.find_one({"name": "AA"}).id == "u1"

def test_record_id_is_immutable():
    rec = Record("r1", {"id": "ignored", "a": 1})
    assert rec.id == "r1"
    assert rec == {"id": "r1", "a": 1}
    rec["a"] = 2
    rec["id"] = "r1"
    with pytest.raises(ValidationError):
        rec["id"] = "r2"
    with pytest.raises(ValidationError):
        del rec["id"]
    with pytest.raises(ValidationError):
        rec.pop("id")
    with pytest.raises(ValidationError):
        rec.popitem()
    rec.clear()
    assert rec == {"id": "r1"}
    assert rec.setdefault("b", 5) == 5
    assert rec.to_dict() == {"id": "r1", "b": 5}

def test_record_in_place_merge_keeps_id(tmp_path):
    model = make_db(tmp_path).model("T")
    rid = model.insert_one({"a": 1})
    rec = model.find_by_id(rid)
    rec |= {"a": 2, "id": rid}
    assert rec == {"id": rid, "a": 2}
    with pytest.raises(ValidationError):
        rec |= {"id": "hijacked", "a": 3}
    assert rec["id"] == rec.id == rid
    assert rec["a"] == 2
    assert model.find_one({"id": "hijacked"}) is None
    assert model.find_by_id(rid) is rec

def test_record_copy_and_pickle():
    rec = Record("r1", {"a": [1, 2]})
    dup = copy.deepcopy(rec)
    assert isinstance(dup, Record) and dup.id == "r1" and dup == rec
    dup["a"].append(3)
    assert rec["a"] == [1, 2]
    back = pickle.loads(pickle.dumps(rec))
    assert back.id == "r1" and back == rec
    assert copy.copy(rec).id == "r1"

def test_invalid_arguments(tmp_path):
    db = make_db(tmp_path)
    with pytest.raises(ValidationError):
        db.model(None)
    m = db.model("T")
    with pytest.raises(ValidationError):
        m.insert_one(["not", "a", "mapping"])
    rid = m.insert_one({})
    with pytest.raises(ValidationError):
        m.update_one_by_id(rid, None)

def test_empty_table_name_is_reachable(tmp_path):
    db_path = tmp_path / "db.json"
    db_path.write_text('{"": [{"id": "x", "a": 1}]}', encoding="utf-8")
    db = Database(str(db_path))
    assert db.table_names == [""]
    m = db.model("")
    assert m.find_by_id("x") == {"id": "x", "a": 1}
    m.insert_one({"a": 2})
    db.commit()
    assert len(Database(str(db_path)).model("")) == 2

def test_table_index_tracks_rows(tmp_path):
    db = make_db(tmp_path)
    m = db.model("T")
    ids = [m.insert_one({"n": i}) for i in range(3)]
    tbl = db.table("T")
    assert len(tbl.index) == 3
    assert all(i in tbl.index for i in ids)
    m.delete_one_by_id(ids[0])
    assert len(tbl.index) == 2
    assert ids[0] not in tbl.index
    assert [r["n"] for r in tbl] == [1, 2]
