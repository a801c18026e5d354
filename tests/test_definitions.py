"""Tests for content declaration and per-class definition sets."""

import dataclasses

import pytest

from pagemodel import (
    ContentDefinitionError,
    Module,
    Page,
    RequiredContentNotPresent,
    SoupNavigator,
    UnknownContentError,
    content,
    content_definitions,
)


HTML = """
<html>
    <body>
        <h1 class="title">Shop</h1>
        <div id="main">
            <p class="intro">Welcome</p>
        </div>
        <footer>Contact us</footer>
    </body>
</html>
"""


class BasePage(Page):
    title = content(lambda s: s.find("h1"), required=False, cache=False)
    intro = content(lambda s: s.find(".intro"))
    footer = content(lambda s: s.find("footer"))


class ShopPage(BasePage):
    title = content(lambda s: s.find("#main .intro"))
    banner = content(lambda s: s.find(".banner"), required=False)


class PlainFooterPage(BasePage):
    footer = "static footer"


class TestInheritance:
    """Subclass declarations replace ancestor declarations whole."""

    def test_subclass_template_wins(self):
        """Test the most-derived template is the one resolved."""
        page = ShopPage(SoupNavigator.from_html(HTML))
        assert page.title.text() == "Welcome"
        assert content_definitions(ShopPage)["title"] is ShopPage.__dict__["title"]

    def test_options_are_not_merged(self):
        """Test an override does not pick up the ancestor's options."""
        template = content_definitions(ShopPage)["title"]
        assert template.options.required is None
        assert template.options.cache is None

        # Ancestor options still apply to the ancestor only
        base_template = content_definitions(BasePage)["title"]
        assert base_template.options.required is False
        assert base_template.options.cache is False

    def test_overridden_content_uses_default_options(self):
        """Test required defaults to True on the override even though the ancestor was optional."""
        html = "<html><body><h1>Only a heading</h1></body></html>"
        assert BasePage(SoupNavigator.from_html(html)).title.text() == "Only a heading"

        with pytest.raises(RequiredContentNotPresent):
            ShopPage(SoupNavigator.from_html(html)).title

    def test_inherited_content_available(self):
        """Test names not redeclared are inherited unchanged."""
        page = ShopPage(SoupNavigator.from_html(HTML))
        assert page.footer.text() == "Contact us"
        assert content_definitions(ShopPage)["footer"] is content_definitions(BasePage)["footer"]

    def test_declaration_order_preserved(self):
        """Test inherited names come first, new names follow in declaration order."""
        assert list(content_definitions(BasePage)) == ["title", "intro", "footer"]
        assert list(content_definitions(ShopPage)) == ["title", "intro", "footer", "banner"]

    def test_plain_attribute_shadows_inherited_content(self):
        """Test a non-content attribute removes the inherited template."""
        assert "footer" not in content_definitions(PlainFooterPage)
        page = PlainFooterPage(SoupNavigator.from_html(HTML))
        assert page.footer == "static footer"
        assert page.has_content("intro")
        assert not page.has_content("footer")

    def test_multiple_inheritance_follows_base_order(self):
        """Test the first base wins when two bases declare the same name."""

        class Left(Page):
            item = content(lambda s: s.find("h1"))

        class Right(Page):
            item = content(lambda s: s.find("footer"))
            extra = content(lambda s: s.find(".intro"))

        class Both(Left, Right):
            pass

        page = Both(SoupNavigator.from_html(HTML))
        assert page.item.text() == "Shop"
        assert page.extra.text() == "Welcome"


class TestDefinitionSetCaching:
    """Definition sets are built once per class."""

    def test_same_set_returned(self):
        """Test repeated lookups return the identical set."""
        assert content_definitions(ShopPage) is content_definitions(ShopPage)

    def test_instances_share_class_set(self):
        """Test instances do not rebuild the set."""
        first = ShopPage(SoupNavigator.from_html(HTML))
        second = ShopPage(SoupNavigator.from_html(HTML))
        assert first.content_definitions is second.content_definitions
        assert first.content_definitions is content_definitions(ShopPage)

    def test_ancestor_set_untouched_by_subclass(self):
        """Test building a subclass leaves the ancestor's set as it was."""
        assert content_definitions(BasePage)["title"] is BasePage.__dict__["title"]
        assert "banner" not in content_definitions(BasePage)

    def test_non_content_class_rejected(self):
        """Test asking a plain class for its definitions fails."""
        with pytest.raises(TypeError):
            content_definitions(object)


class TestDefinitionErrors:
    """Problems detected when a class is created."""

    def test_duplicate_name_in_class_body(self):
        """Test declaring one name twice in a class body raises."""
        with pytest.raises(ContentDefinitionError, match="more than once"):
            class Broken(Page):
                item = content(lambda s: s.find("a"))
                item = content(lambda s: s.find("b"))

    def test_same_template_under_two_names(self):
        """Test one template object cannot back two names."""
        shared = content(lambda s: s.find("p"))
        with pytest.raises(ContentDefinitionError, match="same template"):
            class Twice(Page):
                first = shared
                second = shared

    def test_content_hiding_framework_attribute(self):
        """Test content cannot replace a Page or Module attribute."""
        with pytest.raises(ContentDefinitionError, match="hides attribute"):
            class Hiding(Page):
                find = content(lambda s: s.find("a"))

        with pytest.raises(ContentDefinitionError, match="hides attribute"):
            class HidingModule(Module):
                text = content(lambda s: s.find("a"))

    def test_factory_or_module_required(self):
        """Test content() needs something to produce."""
        with pytest.raises(ContentDefinitionError):
            content()

    def test_factory_must_be_callable(self):
        """Test a non-callable factory is rejected."""
        with pytest.raises(ContentDefinitionError, match="not callable"):
            content("h1")

    def test_invalid_bounds(self):
        """Test min greater than max is rejected at class creation."""
        with pytest.raises(ContentDefinitionError, match="greater than max"):
            class Bounds(Page):
                items = content(lambda s: s.find("li"), min=3, max=1)

    def test_module_must_be_module_subclass(self):
        """Test module= only accepts Module subclasses."""
        with pytest.raises(ContentDefinitionError, match="Module subclass"):
            class WrongModule(Page):
                part = content(lambda s: s.find("div"), module=dict)

    def test_module_params_without_module(self):
        """Test module_params is meaningless without a module."""
        with pytest.raises(ContentDefinitionError, match="without a module"):
            class NoModule(Page):
                part = content(lambda s: s.find("div"), module_params={"index": 1})

    def test_invalid_wait_value(self):
        """Test unsupported wait values are rejected."""
        with pytest.raises(ContentDefinitionError, match="wait"):
            class NegativeWait(Page):
                part = content(lambda s: s.find("div"), wait=-1)

        with pytest.raises(ContentDefinitionError, match="wait"):
            class ListWait(Page):
                part = content(lambda s: s.find("div"), wait=[1, 2])

    def test_content_based_on_itself(self):
        """Test a template cannot name itself as its base."""
        with pytest.raises(ContentDefinitionError, match="itself"):
            class SelfBased(Page):
                part = content(lambda s: s.find("div"), base="part")

    def test_repeating_content_needs_factory(self):
        """Test each=True without a factory cannot locate any elements."""
        class Row(Module):
            pass

        with pytest.raises(ContentDefinitionError, match="each=True"):
            content(module=Row, each=True)


class TestTemplates:
    """Templates are immutable descriptors."""

    def test_class_access_returns_template(self):
        """Test reading the attribute on the class yields the template."""
        template = ShopPage.title
        assert template.name == "title"
        assert template.factory is not None

    def test_template_is_frozen(self):
        """Test templates cannot be modified after creation."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            ShopPage.title.factory = None

    def test_content_cannot_be_assigned_on_instance(self):
        """Test content attributes are read-only on instances."""
        page = ShopPage(SoupNavigator.from_html(HTML))
        with pytest.raises(AttributeError, match="cannot be assigned"):
            page.title = "other"

    def test_parameterized_detection(self):
        """Test factories taking arguments are detected at declaration."""
        assert content(lambda s, i: s.find("li")[i]).takes_arguments is True
        assert content(lambda s, *args: s.find("li")).takes_arguments is True
        assert content(lambda s: s.find("li")).takes_arguments is False

    def test_module_params_are_read_only(self):
        """Test declared module parameters cannot be changed after declaration."""
        template = content(module=Module, module_params={"label": "cart"})

        with pytest.raises(TypeError):
            template.options.module_params["label"] = "other"

        assert template.options.module_params == {"label": "cart"}

    def test_unknown_content(self):
        """Test looking up an undeclared name fails with the owner's name."""
        page = ShopPage(SoupNavigator.from_html(HTML))
        with pytest.raises(UnknownContentError) as exc_info:
            page.get_content("missing")

        assert exc_info.value.name == "missing"
        assert exc_info.value.owner == "ShopPage"
        assert isinstance(exc_info.value, AttributeError)
