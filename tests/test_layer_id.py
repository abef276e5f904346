from rgis.layer_id import LayerId


def test_new_ids_are_unique():
    ids = [LayerId.new() for _ in range(50)]
    assert len(set(ids)) == len(ids)


def test_new_ids_increase():
    a = LayerId.new()
    b = LayerId.new()
    assert a < b
    assert sorted([b, a]) == [a, b]


def test_ids_positive():
    assert LayerId.new().value >= 1


def test_equality_by_value():
    a = LayerId.new()
    assert LayerId(a.value) == a
    assert hash(LayerId(a.value)) == hash(a)