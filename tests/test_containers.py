from rustlings.exercises.containers import (
    Cons,
    Cow,
    Nil,
    Wrapper,
    abs_all,
    array_and_vec,
    create_empty_list,
    create_non_empty_list,
    longest,
    vec_loop,
    vec_map,
)


def test_array_and_vec_similarity():
    array, vec = array_and_vec()
    assert list(array) == vec
    assert vec == [10, 20, 30, 40]


def test_vec_loop():
    values = [2, 4, 6, 8, 10]
    result = vec_loop(values)
    assert result == [4, 8, 12, 16, 20]
    assert result is values


def test_vec_map():
    values = [2, 4, 6, 8, 10]
    assert vec_map(values) == [4, 8, 12, 16, 20]
    assert values == [2, 4, 6, 8, 10]


def test_store_u32_in_wrapper():
    assert Wrapper(42).value == 42


def test_store_str_in_wrapper():
    assert Wrapper("Foo").value == "Foo"


def test_create_empty_list():
    assert create_empty_list() == Nil()


def test_create_non_empty_list():
    non_empty = create_non_empty_list()
    assert non_empty == Cons(1, Nil())
    assert not non_empty == create_empty_list()


def test_reference_mutation():
    data = [-1, 0, 1]
    cow = abs_all(Cow.borrowed(data))
    assert cow.is_owned is True
    assert list(cow) == [1, 0, 1]
    assert data == [-1, 0, 1]


def test_reference_no_mutation():
    data = [0, 1, 2]
    cow = abs_all(Cow.borrowed(data))
    assert cow.is_borrowed is True
    assert list(cow) == [0, 1, 2]


def test_owned_no_mutation():
    cow = abs_all(Cow.owned([0, 1, 2]))
    assert cow.is_owned is True
    assert list(cow) == [0, 1, 2]


def test_owned_mutation():
    cow = abs_all(Cow.owned([-1, 0, 1]))
    assert cow.is_owned is True
    assert list(cow) == [1, 0, 1]


def test_to_mut_keeps_owned_data_in_place():
    cow = Cow.owned([1, 2])
    first = cow.to_mut()
    assert cow.to_mut() is first


def test_longest_picks_longer():
    assert longest("abcd", "xyz") == "abcd"
    assert longest("xyz", "long string is long") == "long string is long"


def test_longest_prefers_second_on_tie():
    assert longest("abc", "xyz") == "xyz"


def test_longest_measures_bytes():
    assert longest("é", "ab") == "ab"
    assert longest("éé", "abc") == "éé"