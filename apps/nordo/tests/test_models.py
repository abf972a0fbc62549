import pytest

from models import BoilSession, Potato, parse_batch


class TestPotato:
    def test_defaults(self):
        potato = Potato.from_dict({"size": 3})
        assert potato == Potato(size=3)
        assert potato.boiled is False

    def test_to_dict_keys(self):
        data = Potato(size=3, oil_used="peanut", fried=True).to_dict()
        assert data == {
            "size": 3,
            "oil_used": "peanut",
            "boiled": False,
            "fried": True,
            "coated_in_maple_syrup": False,
        }

    @pytest.mark.parametrize("payload", [
        {},
        {"size": 0},
        {"size": -2},
        {"size": "9"},
        {"size": True},
        {"size": 9, "oil_used": 4},
        {"size": 9, "boiled": "yes"},
        "potato",
    ])
    def test_rejects_malformed(self, payload):
        with pytest.raises(ValueError):
            Potato.from_dict(payload)


class TestParseBatch:
    def test_parses_list(self):
        batch = parse_batch({"potatoes": [{"size": 1}, {"size": 2}]})
        assert [p.size for p in batch] == [1, 2]

    def test_empty_batch_is_allowed(self):
        assert parse_batch({"potatoes": []}) == []

    @pytest.mark.parametrize("payload", [None, [], {"potatoes": {"size": 1}}])
    def test_rejects_missing_list(self, payload):
        with pytest.raises(ValueError):
            parse_batch(payload)


class TestBoilSession:
    def test_starts_idle(self):
        assert not BoilSession().active

    def test_copy_is_independent(self):
        session = BoilSession(started_at=1.0, batch=[Potato(size=1)])
        copy = session.copy()
        copy.batch[0].boiled = True
        assert session.batch[0].boiled is False

    def test_clear_resets_both_fields(self):
        session = BoilSession(started_at=1.0, batch=[Potato(size=1)])
        session.clear()
        assert session.started_at is None
        assert session.batch is None
