"""
End-to-end replay of queries against the static driver and fixture pages.
"""
import time

import pytest

from application.ports.page_driver import InterceptedResponse
from application.query import Query
from domain.exceptions import (
    BlankPageError,
    HttpStatusError,
    InvalidPipeline,
    NoResultsError,
    SelectorTimeoutError,
)
from infrastructure.drivers.static_driver import StaticPageDriver


def test_returns_list_of_results(page, deps, host):
    results = Query.get(f"{host}/example.html").select({"title": "body > div > p"})._run(page, deps)

    assert isinstance(results, list)
    assert results == [{"title": "Test"}]


def test_run_without_select_fails(page, deps, host):
    with pytest.raises(NoResultsError, match="query did not return any results. Did you forget a select?"):
        Query.get(f"{host}/example.html")._run(page, deps)


def test_run_without_select_fails_regardless_of_other_steps(page, deps, host):
    q = Query.get(f"{host}/example.html").wait_for("body").group_by("body > div").go(f"{host}/list.html")
    with pytest.raises(NoResultsError):
        q.run(page, deps)


def test_blank_page(page, deps):
    with pytest.raises(BlankPageError, match="blank page"):
        Query.get("about:blank").select({"title": "p"})._run(page, deps)


def test_bad_status(page, deps):
    page.set_request_interception(True)
    page.on_request(lambda req: InterceptedResponse(status=404, content_type="text/plain", body="Not Found!"))

    with pytest.raises(HttpStatusError, match="response return status code: 404") as excinfo:
        Query.get("http://bad.com").select({"title": "p"})._run(page, deps)
    assert excinfo.value.status == 404


def test_unknown_fixture_is_404(page, deps, host):
    with pytest.raises(HttpStatusError) as excinfo:
        Query.get(f"{host}/missing.html").select({"title": "p"}).run(page, deps)
    assert excinfo.value.status == 404


def test_sends_post_request(page, deps, http_client, host):
    Query.post(f"{host}/example.html", post_data="doggo").select({"title": "body > div > p"})._run(page, deps)

    assert http_client.requests[0]["method"] == "POST"
    assert http_client.requests[0]["data"] == "doggo"


def test_wait_for_selector(page, deps, host):
    results = (
        Query.get(f"{host}/list.html")
        .wait_for("#demo > ul > li")
        .select({"title": "#demo > ul > li"})
        ._run(page, deps)
    )

    assert results == [{"title": "DYNAMIC THING"}]


def test_group_by_elements(page, deps, host):
    results = Query.get(f"{host}/example.html").group_by("body > div").select({"title": "p"})._run(page, deps)

    assert results == [{"title": "Test"}, {"title": "Foo"}]


def test_chain_functions_together(page, deps, host):
    results = (
        Query.get(f"{host}/example.html")
        .wait_for("body")
        .group_by("body > div")
        .select({"title": "p"})
        ._run(page, deps)
    )

    assert results == [{"title": "Test"}, {"title": "Foo"}]


def test_group_by_without_matches_yields_no_records(page, deps, host):
    results = Query.get(f"{host}/example.html").group_by("section").select({"title": "p"}).run(page, deps)

    assert results == []


def test_wait_for_times_out(page, deps, host):
    started = time.monotonic()
    with pytest.raises(SelectorTimeoutError) as excinfo:
        Query.get(f"{host}/example.html").wait_for("body > doesnotexists", 10)._run(page, deps)

    assert time.monotonic() - started >= 0.01
    assert excinfo.value.selector == "body > doesnotexists"
    assert excinfo.value.timeout_ms == 10


def test_wait_for_timeout_is_catchable_as_builtin(page, deps, host):
    with pytest.raises(TimeoutError):
        Query.get(f"{host}/example.html").wait_for("nope", 5).select({"a": "p"}).run(page, deps)


def test_only_one_select_per_scope(host):
    with pytest.raises(InvalidPipeline, match="Select can only take a path collection"):
        Query.get(f"{host}/example.html").select({"title": "body > div > p"}).select({"title": "body > div > p"})


def test_goto_multiple_pages(page, deps, host):
    results = (
        Query.get(f"{host}/list.html")
        .go(f"{host}/example.html")
        .select({"title": "body > div > p"})
        ._run(page, deps)
    )

    assert results == [{"title": "Test"}]


def test_go_resets_group_scope(page, deps, host):
    results = (
        Query.get(f"{host}/example.html")
        .group_by("body > div")
        .go(f"{host}/list.html")
        .select({"title": "li"})
        .run(page, deps)
    )

    assert results == [{"title": "DYNAMIC THING"}]


def test_custom_action(page, deps, host):
    def add_element(page, results):
        def mutate(document):
            node = document.new_tag("span")
            node.string = "Foo"
            document.select_one("body > div").append(node)

        page.evaluate(mutate)
        return page, results

    results = (
        Query.get(f"{host}/example.html")
        .eval(add_element)
        .select({"title": "body > div > span"})
        ._run(page, deps)
    )

    assert results == [{"title": "Foo"}]


def test_text_from_attr(page, deps, host):
    results = (
        Query.get(f"{host}/example.html")
        .select({"dataAttr": {"path": "body > div > p", "attr": "data-attr"}})
        ._run(page, deps)
    )

    assert results == [{"dataAttr": "datainhere"}]


def test_single_result_from_complex_page(page, deps, host):
    results = (
        Query.get(f"{host}/places.html")
        .select(
            {
                "name": "div.section-hero-header-title > h1",
                "phone": "#pane > ul > li:nth-child(1) > span.phone",
                "url": "a[data-attribution-url]",
            }
        )
        ._run(page, deps)
    )

    assert results == [
        {
            "name": "Boudreaux's Louisiana Seafood & Steaks",
            "phone": "(816) 387-9911",
            "url": "boudreauxstjoe.com",
        }
    ]


def test_missing_fields_are_none(page, deps, host):
    results = (
        Query.get(f"{host}/places.html")
        .group_by("li.place")
        .select({"name": "span.name", "phone": "span.phone", "link": {"path": "a.site", "attr": "href"}})
        .run(page, deps)
    )

    assert results == [
        {"name": "Boudreaux's", "phone": "(816) 387-9911", "link": f"{host}/places/1"},
        {"name": "Cafe Hemingway", "phone": None, "link": "https://cafe.example.com/"},
        {"name": "Norty's", "phone": "(816) 555-0101", "link": f"{host}/places/3"},
    ]


def test_select_on_each_scope_accumulates(page, deps, host):
    results = (
        Query.get(f"{host}/example.html")
        .select({"heading": "title"})
        .group_by("body > div")
        .select({"title": "p"})
        .run(page, deps)
    )

    assert results == [{"heading": "Example"}, {"title": "Test"}, {"title": "Foo"}]


def test_replay_against_independent_drivers(http_client, defaults, deps, host):
    q = Query.get(f"{host}/example.html").group_by("body > div").select({"title": "p"})
    first_page = StaticPageDriver(http_client=http_client, defaults=defaults)
    second_page = StaticPageDriver(http_client=http_client, defaults=defaults)

    first = q.run(first_page, deps)
    first.append({"title": "mutated"})
    second = q.run(second_page, deps)

    assert second == [{"title": "Test"}, {"title": "Foo"}]
    assert len(http_client.requests) == 2


def test_eval_mutation_does_not_leak_between_runs(http_client, defaults, deps, host):
    def drop_first_div(page, results):
        page.evaluate(lambda doc: doc.select_one("body > div").decompose())
        return page, results

    q = Query.get(f"{host}/example.html").eval(drop_first_div).group_by("body > div").select({"title": "p"})

    assert q.run(StaticPageDriver(http_client=http_client, defaults=defaults), deps) == [{"title": "Foo"}]
    assert q.run(StaticPageDriver(http_client=http_client, defaults=defaults), deps) == [{"title": "Foo"}]


def test_eval_results_are_kept_before_select_records(page, deps, host):
    def seed(page, results):
        return page, results + [{"title": "seeded"}]

    results = Query.get(f"{host}/example.html").eval(seed).select({"title": "body > div > p"}).run(page, deps)

    assert results == [{"title": "seeded"}, {"title": "Test"}]


def test_eval_results_without_select_still_fail(page, deps, host):
    def seed(page, results):
        return page, [{"title": "seeded"}]

    with pytest.raises(NoResultsError):
        Query.get(f"{host}/example.html").eval(seed).run(page, deps)


def test_eval_after_select_can_reshape_results(page, deps, host):
    def upper(page, results):
        return page, [{k: v.upper() for k, v in r.items()} for r in results]

    results = (
        Query.get(f"{host}/example.html")
        .group_by("body > div")
        .select({"title": "p"})
        .eval(upper)
        .run(page, deps)
    )

    assert results == [{"title": "TEST"}, {"title": "FOO"}]


def test_driver_errors_propagate_unwrapped(deps, defaults, host):
    class Boom(Exception):
        pass

    class FailingClient:
        def request(self, method, url, headers=None, data=None):
            raise Boom("connection refused")

    page = StaticPageDriver(http_client=FailingClient(), defaults=defaults)
    with pytest.raises(Boom, match="connection refused"):
        Query.get(f"{host}/example.html").select({"title": "p"}).run(page, deps)
