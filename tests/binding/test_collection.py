"""Tests for CollectionBinder."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from htmlbind.binding.resolver import BinderResolver
from htmlbind.domain.errors import UnsupportedTypeError, ValueConversionError
from htmlbind.domain.selectors import html_field
from htmlbind.domain.types import BindingBehavior
from htmlbind.infrastructure.document import parse_markup
from tests.models import Parent, Person


@dataclass
class Scores:
    values: list[int] = html_field("li", default_factory=list)


@dataclass
class Links:
    hrefs: list[str] = html_field(
        "a", behavior=BindingBehavior.ATTRIBUTE, attribute="href", default_factory=list
    )


@dataclass
class Team:
    members: list[Person] = html_field(".member", default_factory=list)


@dataclass
class League:
    teams: list[Team] = html_field(".team", default_factory=list)


@dataclass
class Aged:
    age: int = html_field(".age", default=0)


@dataclass
class Family:
    members: list[Aged] = html_field(".m", default_factory=list)


@dataclass
class Town:
    families: list[Family] = html_field(".f", default_factory=list)


def bind(resolver: BinderResolver, tp: type, markup: str) -> object:
    document = parse_markup(markup)
    return resolver.resolve(tp).bind(document.root)


class TestCollectionBinding:
    def test_document_order_and_length(self, resolver: BinderResolver) -> None:
        scores = bind(resolver, Scores, "<ul><li>3</li><li>1</li><li>2</li></ul>")
        assert scores == Scores(values=[3, 1, 2])

    def test_empty_match_yields_empty_list(self, resolver: BinderResolver) -> None:
        scores = bind(resolver, Scores, "<p>none</p>")
        assert isinstance(scores, Scores)
        assert scores.values == []

    def test_empty_match_replaces_default(self, resolver: BinderResolver) -> None:
        @dataclass
        class Prefilled:
            values: list[int] = html_field("li", default_factory=lambda: [99])

        prefilled = bind(resolver, Prefilled, "<p>none</p>")
        assert isinstance(prefilled, Prefilled)
        assert prefilled.values == []

    def test_each_item_scoped_to_its_match(self, resolver: BinderResolver) -> None:
        markup = """
        <ul id="children">
          <li><span id="firstName">John</span><span id="lastName">Doe</span></li>
          <li><span id="firstName">Jane</span></li>
        </ul>
        """
        parent = bind(resolver, Parent, markup)
        assert isinstance(parent, Parent)
        assert parent.children == [Person("John", "Doe"), Person("Jane", None)]

    def test_attribute_items(self, resolver: BinderResolver) -> None:
        links = bind(resolver, Links, '<a href="/1">1</a><a href="/2">2</a>')
        assert links == Links(hrefs=["/1", "/2"])

    def test_missing_attribute_on_item_fails_with_index(self, resolver: BinderResolver) -> None:
        with pytest.raises(ValueConversionError, match="href") as exc_info:
            bind(resolver, Links, '<a href="/1">1</a><a>2</a>')
        assert exc_info.value.path == "hrefs[1]"
        assert exc_info.value.raw_text is None

    def test_item_failure_carries_index(self, resolver: BinderResolver) -> None:
        with pytest.raises(ValueConversionError) as exc_info:
            bind(resolver, Scores, "<li>1</li><li>two</li>")
        assert exc_info.value.path == "values[1]"

    def test_nested_collection_failure_path(self, resolver: BinderResolver) -> None:
        markup = """
        <div class="f"><div class="m"><b class="age">30</b></div></div>
        <div class="f">
          <div class="m"><b class="age">4</b></div>
          <div class="m"><b class="age">old</b></div>
        </div>
        """
        with pytest.raises(ValueConversionError) as exc_info:
            bind(resolver, Town, markup)
        assert exc_info.value.path == "families[1].members[1].age"

    def test_nested_collections_stay_in_scope(self, resolver: BinderResolver) -> None:
        markup = """
        <div class="team"><p class="member"><b id="firstName">A</b></p></div>
        <div class="team">
          <p class="member"><b id="firstName">B</b></p>
          <p class="member"><b id="firstName">C</b></p>
        </div>
        """
        league = bind(resolver, League, markup)
        assert isinstance(league, League)
        assert [[m.first_name for m in team.members] for team in league.teams] == [
            ["A"],
            ["B", "C"],
        ]

    def test_top_level_collection_needs_a_selector(self, resolver: BinderResolver) -> None:
        document = parse_markup("<li>1</li>")
        with pytest.raises(UnsupportedTypeError, match="selector"):
            resolver.resolve(list[int]).bind(document.root)
