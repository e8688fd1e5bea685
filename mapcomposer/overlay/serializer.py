"""Write SVG markup from an overlay scene.

Markup is assembled with ElementTree, so address and place names coming from
callers are escaped as text and can never open new elements.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET

from mapcomposer.overlay.primitives import Circle, OverlayScene, RoundedRect, Shape, TextRun

SVG_NS = "http://www.w3.org/2000/svg"

_FONT_FAMILY = "Arial, Helvetica, sans-serif"

# Code points XML 1.0 forbids in character data.
_XML_ILLEGAL = re.compile("[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")

# style name -> (fill, font-weight)
_TEXT_STYLES: dict[str, tuple[str, str]] = {
    "title": ("#11181C", "bold"),
    "text": ("#11181C", "normal"),
    "muted": ("#687076", "normal"),
}


def _num(value: float) -> str:
    """Compact number formatting: 12 not 12.0, 4.5 not 4.50."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def _clean(text: str) -> str:
    return _XML_ILLEGAL.sub(" ", text)


def _rect(parent: ET.Element, rect: RoundedRect) -> None:
    attrs = {
        "x": _num(rect.x),
        "y": _num(rect.y),
        "width": _num(rect.width),
        "height": _num(rect.height),
        "rx": _num(rect.rx),
        "fill": rect.fill,
        "fill-opacity": _num(rect.fill_opacity),
    }
    if rect.stroke:
        attrs["stroke"] = rect.stroke
        attrs["stroke-width"] = _num(rect.stroke_width)
    ET.SubElement(parent, "rect", attrs)


def _circle(parent: ET.Element, circle: Circle) -> None:
    ET.SubElement(parent, "circle", {
        "cx": _num(circle.cx),
        "cy": _num(circle.cy),
        "r": _num(circle.r),
        "fill": circle.fill,
    })


def _text(parent: ET.Element, run: TextRun) -> None:
    fill, weight = _TEXT_STYLES.get(run.style, _TEXT_STYLES["text"])
    node = ET.SubElement(parent, "text", {
        "x": _num(run.x),
        "y": _num(run.y),
        "font-family": _FONT_FAMILY,
        "font-size": str(run.font_size),
        "font-weight": weight,
        "fill": fill,
        "xml:space": "preserve",
    })
    if len(run.spans) == 1 and run.spans[0].fill is None:
        node.text = _clean(run.spans[0].text)
        return
    for span in run.spans:
        attrs = {"fill": span.fill} if span.fill else {}
        ET.SubElement(node, "tspan", attrs).text = _clean(span.text)


def _shape(parent: ET.Element, shape: Shape) -> None:
    if isinstance(shape, RoundedRect):
        _rect(parent, shape)
    elif isinstance(shape, Circle):
        _circle(parent, shape)
    elif isinstance(shape, TextRun):
        _text(parent, shape)
    else:
        raise TypeError(f"unsupported shape: {type(shape).__name__}")


def serialize_scene(scene: OverlayScene) -> str:
    """Render the scene as a standalone SVG document sized to the canvas."""
    root = ET.Element("svg", {
        "xmlns": SVG_NS,
        "width": str(scene.width),
        "height": str(scene.height),
        "viewBox": f"0 0 {scene.width} {scene.height}",
    })
    for box in scene.boxes:
        group = ET.SubElement(root, "g", {"id": f"{box.name}-box"})
        _rect(group, box.shadow)
        _rect(group, box.frame)
        for shape in box.shapes:
            _shape(group, shape)
    return ET.tostring(root, encoding="unicode")
