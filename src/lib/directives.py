"""
Setting directive registry for printdown

Each setting directive is a <!-- key: value --> comment mapped to one or
more DocumentSettings fields by a small normalizer function. The extractor
walks this table instead of carrying one matching routine per directive.
"""

from typing import Any, Callable, Dict, Iterator, Optional

from ..models.directives import DirectiveSpec, DirectiveCategory, rewrite_is

TRUTHY_VALUES = ('on', 'true', 'yes')


def verbatim(field_name: str) -> Callable[[str], Dict[str, Any]]:
    """Build a parser storing the trimmed value as-is"""
    def parse(value: str) -> Dict[str, Any]:
        return {field_name: value}
    return parse


def flag(field_name: str) -> Callable[[str], Dict[str, Any]]:
    """Build a parser mapping on/true/yes to True and anything else to False"""
    def parse(value: str) -> Dict[str, Any]:
        return {field_name: value.lower() in TRUTHY_VALUES}
    return parse


def pageNumbers_parse(value: str) -> Dict[str, Any]:
    """
    Normalize a page-numbers value

    Example:
        "x"      -> enabled, format "X"
        "X of Y" -> enabled, format "X of Y"
        "off"    -> disabled, format "X of Y"
    """
    setting = value.lower()
    if setting in TRUTHY_VALUES or setting == 'x of y':
        return {'page_numbers': True, 'page_number_format': 'X of Y'}
    if setting == 'x':
        return {'page_numbers': True, 'page_number_format': 'X'}
    return {'page_numbers': False, 'page_number_format': 'X of Y'}


class DirectiveRegistry:
    """
    Registry of setting directive specifications

    Maps comment keys to DirectiveSpec objects. Keys used by the special
    content transformer (page breaks, shields, column widths) are refused,
    which keeps the two comment vocabularies disjoint.
    """

    def __init__(self) -> None:
        """Initialize the registry and register all built-in directives"""
        self.specs: Dict[str, DirectiveSpec] = {}
        self.colorDirectives_register()
        self.sizeDirectives_register()
        self.flagDirectives_register()
        self.footerDirectives_register()
        self.outputDirectives_register()

    def register(self, spec: DirectiveSpec) -> None:
        """
        Register a directive specification

        Raises:
            ValueError: If the key belongs to the rewrite vocabulary
        """
        if rewrite_is(spec.key):
            raise ValueError(f"'{spec.key}' is reserved for content rewriting")
        self.specs[spec.key] = spec

    def get(self, key: str) -> Optional[DirectiveSpec]:
        """Get directive specification by comment key (case-insensitive)"""
        return self.specs.get(key.strip().lower())

    def __iter__(self) -> Iterator[DirectiveSpec]:
        return iter(self.specs.values())

    def directives_listByCategory(self, category: DirectiveCategory) -> list[DirectiveSpec]:
        """Get all directives in a category"""
        return [spec for spec in self.specs.values() if spec.category == category]

    def colorDirectives_register(self) -> None:
        """Register color directives"""
        for key, field_name, description in (
            ('theme-color', 'theme_color', 'Accent color for headings, rules and tables'),
            ('body-color', 'body_color', 'Body text color'),
            ('link-color', 'link_color', 'Link color'),
        ):
            self.register(DirectiveSpec(
                key=key,
                category=DirectiveCategory.COLOR,
                description=description,
                parse=verbatim(field_name),
                examples=[f'<!-- {key}: #ff6b35 -->'],
            ))

    def sizeDirectives_register(self) -> None:
        """Register size and spacing directives"""
        for key, field_name, category, description in (
            ('font-size', 'base_font_size', DirectiveCategory.SIZE, 'Base font size'),
            ('header-size', 'header_size', DirectiveCategory.SIZE, 'Header scale base'),
            ('body-size', 'body_size', DirectiveCategory.SIZE, 'Body text size'),
            ('line-height', 'line_height', DirectiveCategory.SPACING, 'Line height of text elements'),
            ('paragraph-spacing', 'paragraph_spacing', DirectiveCategory.SPACING, 'Space after paragraphs'),
            ('header-spacing', 'header_spacing', DirectiveCategory.SPACING, 'Space above headers'),
        ):
            self.register(DirectiveSpec(
                key=key,
                category=category,
                description=description,
                parse=verbatim(field_name),
                examples=[f'<!-- {key}: 1.2em -->'],
            ))

    def flagDirectives_register(self) -> None:
        """Register on/off directives"""
        self.register(DirectiveSpec(
            key='link-underline',
            category=DirectiveCategory.FLAG,
            description='Underline links (on/true/yes)',
            parse=flag('link_underline'),
            examples=['<!-- link-underline: on -->', '<!-- link-underline: off -->'],
        ))
        self.register(DirectiveSpec(
            key='sequential-output',
            category=DirectiveCategory.FLAG,
            description='Suffix output names with the version number and bump it after each run',
            parse=flag('sequential_output'),
            examples=['<!-- sequential-output: on -->'],
        ))

    def footerDirectives_register(self) -> None:
        """Register page footer directives"""
        self.register(DirectiveSpec(
            key='page-numbers',
            category=DirectiveCategory.FOOTER,
            description='Print page numbers as "X" or "X of Y"',
            parse=pageNumbers_parse,
            examples=['<!-- page-numbers: on -->', '<!-- page-numbers: X -->', '<!-- page-numbers: X of Y -->'],
        ))
        self.register(DirectiveSpec(
            key='disclosure',
            category=DirectiveCategory.FOOTER,
            description='Disclosure label printed in the page footer',
            parse=verbatim('disclosure'),
            examples=['<!-- disclosure: Internal Use Only / CONFIDENTIAL -->'],
        ))

    def outputDirectives_register(self) -> None:
        """Register output naming directives"""
        self.register(DirectiveSpec(
            key='version-number',
            category=DirectiveCategory.OUTPUT,
            description='Document version (NN.NN) used by sequential output',
            parse=verbatim('version_number'),
            examples=['<!-- version-number: 01.07 -->'],
        ))
