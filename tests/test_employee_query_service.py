"""
Tests de las lecturas sobre la caché
"""
import json
from unittest.mock import Mock

from employee_cache.services.employee_query_service import EmployeeQueryService, build_name_query
from tests.conftest import make_employee


def test_get_all_returns_every_cached_employee(queries, seed):
    seed([make_employee("1", "Alice", 50000), make_employee("2", "Bob", 60000)])

    ids = sorted(e.id for e in queries.get_all())

    assert ids == ["1", "2"]


def test_get_all_rereads_current_state(queries, seed, maintainer):
    seed([make_employee("1", "Alice", 50000)])
    employees = queries.get_all
    assert len(list(employees())) == 1

    maintainer.index_employee(make_employee("2", "Bob", 60000))
    assert len(list(employees())) == 2


def test_get_all_skips_corrupt_documents(queries, seed, repo):
    seed([make_employee("1", "Alice", 50000)])
    repo.documents["employee:broken"] = {"id": "broken"}

    assert [e.id for e in queries.get_all()] == ["1"]


def test_get_by_id_found_and_missing(queries, seed):
    seed([make_employee("id-1", "Alice", 100000)])

    assert queries.get_by_id("id-1").name == "Alice"
    assert queries.get_by_id("nope") is None


def test_highest_salary(queries, seed):
    seed([
        make_employee("a", "A", 100000),
        make_employee("b", "B", 90000),
        make_employee("c", "C", 50000),
    ])

    salary = queries.get_highest_salary()

    assert salary == 100000
    assert isinstance(salary, int)


def test_highest_salary_empty_cache(queries):
    assert queries.get_highest_salary() is None


def test_top_n_returns_names_in_descending_salary_order(queries, seed):
    employees = [make_employee(f"id-{i}", f"Employee-{i}", 200000 - i * 1000) for i in range(1, 13)]
    # orden de inserción mezclado a propósito
    seed(list(reversed(employees)))

    names = queries.get_top_earner_names(10)

    assert names == [f"Employee-{i}" for i in range(1, 11)]


def test_top_n_skips_ranked_ids_without_document(queries, seed, repo):
    seed([make_employee("a", "A", 300), make_employee("b", "B", 200), make_employee("c", "C", 100)])
    del repo.documents["employee:b"]

    assert queries.get_top_earner_names(3) == ["A", "C"]


def test_top_n_with_non_positive_n(queries, seed):
    seed([make_employee("a", "A", 300)])
    assert queries.get_top_earner_names(0) == []


def test_search_by_name_is_case_insensitive(queries, seed):
    seed([
        make_employee("wiremock-1", "WireMock Alice", 70000),
        make_employee("wiremock-2", "WireMock Bob", 80000),
    ])

    assert [e.id for e in queries.search_by_name("alice")] == ["wiremock-1"]
    assert [e.id for e in queries.search_by_name("ALICE")] == ["wiremock-1"]
    assert sorted(e.id for e in queries.search_by_name("wiremock")) == ["wiremock-1", "wiremock-2"]


def test_search_blank_fragment_does_not_query(codec, settings):
    repo = Mock()
    service = EmployeeQueryService(repo, codec, settings)

    assert service.search_by_name("   ") == []
    repo.search.assert_not_called()


def test_search_skips_unparseable_documents(codec, settings):
    repo = Mock()
    repo.search.return_value = [
        json.dumps({"id": "1", "name": "Alice", "salary": 5}),
        "{broken",
        None,
    ]
    service = EmployeeQueryService(repo, codec, settings)

    assert [e.id for e in service.search_by_name("ali")] == ["1"]
    repo.search.assert_called_once_with("employeeIdx", "@name:(*ali*)", 1000)


def test_build_name_query_lowercases_splits_and_escapes():
    assert build_name_query("Alice") == "@name:(*alice*)"
    assert build_name_query("WireMock  Bob") == "@name:(*wiremock* *bob*)"
    assert build_name_query("o'brien") == "@name:(*o\\'brien*)"
    assert build_name_query("") is None
