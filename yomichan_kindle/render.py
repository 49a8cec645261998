"""
Rich content rendering.

Turns parsed Yomichan content into lxml elements. Every render function
appends to a parent element and returns the headword flag: True while the
rendered text is still on the first line, which is shown in bold.
"""

import re
from typing import Any, Dict, List, Mapping, Optional

from lxml import etree

from yomichan_kindle.yomichan import Content, ContentList, Element, Image, Text

PathMap = Mapping[str, str]

# Style properties rendered as wrapper elements instead of inline CSS
HANDLED_STYLES = ('fontStyle', 'fontWeight', 'textDecorationLine', 'verticalAlign')

TEXT_DECORATION_TAGS = {'underline': 'u', 'line-through': 's'}
VERTICAL_ALIGN_TAGS = {'super': 'sup', 'sub': 'sub'}

# Characters lxml refuses in text and attribute values
_XML_INVALID = re.compile('[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]')


def _clean(text: str) -> str:
    return _XML_INVALID.sub('', text)


def append_text(parent: etree._Element, text: Optional[str]):
    """Append text after the last child of `parent` (or as its text)."""
    if not text:
        return
    text = _clean(text)
    if len(parent):
        last = parent[-1]
        last.tail = (last.tail or '') + text
    else:
        parent.text = (parent.text or '') + text


# ============================================================================
# CSS
# ============================================================================

def kebab_case(name: str) -> str:
    """Convert a camelCase property name: fontSize -> font-size."""
    return re.sub(r'[A-Z]', lambda m: '-' + m.group(0).lower(), name)


def _css_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ' '.join(_css_value(v) for v in value)
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def flatten_css(style: Dict[str, Any]) -> str:
    """Flatten style properties into `property:value` pairs joined by `;`."""
    return ';'.join(
        f"{kebab_case(key)}:{_css_value(value)}"
        for key, value in style.items()
        if value is not None and value != ''
    )


def style_wrappers(style: Dict[str, Any]) -> List[str]:
    """Get the wrapper tags replacing italic, bold, decoration and alignment."""
    tags = []
    if style.get('fontStyle') == 'italic':
        tags.append('i')
    if style.get('fontWeight') == 'bold':
        tags.append('b')

    decorations = style.get('textDecorationLine') or []
    if isinstance(decorations, str):
        decorations = [decorations]
    for decoration in decorations:
        if decoration in TEXT_DECORATION_TAGS:
            tags.append(TEXT_DECORATION_TAGS[decoration])

    vertical_align = style.get('verticalAlign')
    if vertical_align in VERTICAL_ALIGN_TAGS:
        tags.append(VERTICAL_ALIGN_TAGS[vertical_align])

    return tags


# ============================================================================
# Content Rendering
# ============================================================================

def render_text(parent: etree._Element, text: str, headword: bool) -> bool:
    """Render text, turning newlines into <br/> and bolding the first line."""
    lines = text.split('\n')
    for i, line in enumerate(lines):
        if headword and i == 0:
            bold = etree.SubElement(parent, 'b')
            bold.text = _clean(line)
        else:
            append_text(parent, line)
        if i < len(lines) - 1:
            etree.SubElement(parent, 'br')
    return headword and len(lines) == 1


def render_image(parent: etree._Element, image: Image, path_map: PathMap):
    """Render an image, pointing `src` at the converted file when there is one."""
    attributes = {'src': path_map.get(image.path, image.path)}
    alt = image.title or image.description
    if alt:
        attributes['alt'] = _clean(alt)

    unit = image.size_units or 'px'
    style: Dict[str, Any] = {}
    if image.width:
        style['width'] = _css_value(image.width) + unit
    if image.height:
        style['height'] = _css_value(image.height) + unit
    image_rendering = image.image_rendering or ('pixelated' if image.pixelated else None)
    if image_rendering:
        style['imageRendering'] = image_rendering
    if image.vertical_align:
        style['verticalAlign'] = image.vertical_align

    css = flatten_css(style)
    if css:
        attributes['style'] = css

    etree.SubElement(parent, 'img', attrib=attributes)

    if image.standalone:
        etree.SubElement(parent, 'br')
        append_text(parent, image.description)


def render_element(
    parent: etree._Element,
    element: Element,
    headword: bool,
    path_map: PathMap,
) -> bool:
    """
    Render a tagged node.

    Italic, bold, decoration and sub/superscript styles become wrapper
    elements. A span with such styles becomes the first wrapper itself.
    """
    attributes = {key: _clean(value) for key, value in element.attributes.items()}
    css = flatten_css({k: v for k, v in element.style.items() if k not in HANDLED_STYLES})
    if css:
        attributes['style'] = css

    wrappers = style_wrappers(element.style)
    if element.tag == 'span' and wrappers:
        node = etree.SubElement(parent, wrappers[0], attrib=attributes)
        wrappers = wrappers[1:]
    else:
        node = etree.SubElement(parent, element.tag, attrib=attributes)

    for wrapper in wrappers:
        node = etree.SubElement(node, wrapper)

    if element.content is not None:
        headword = render_content(node, element.content, headword, path_map)

    return element.tag != 'br' and headword


def render_content(
    parent: etree._Element,
    content: Content,
    headword: bool,
    path_map: Optional[PathMap] = None,
) -> bool:
    """
    Render any content item into `parent`.

    Args:
        parent: Element receiving the markup
        content: Parsed content
        headword: Whether the text rendered next is still on the first line
        path_map: Original image path -> converted image path

    Returns:
        The headword flag after this content
    """
    if path_map is None:
        path_map = {}

    if isinstance(content, Text):
        return render_text(parent, content.text, headword)
    if isinstance(content, ContentList):
        for item in content.items:
            headword = render_content(parent, item, headword, path_map)
        return headword
    if isinstance(content, Image):
        render_image(parent, content, path_map)
        return headword
    if isinstance(content, Element):
        return render_element(parent, content, headword, path_map)

    raise TypeError(f"Unsupported content: {content!r}")
