"""Convert a JSON document into escaped, minified, pretty, Base64, URL-encoded,
source-literal or XML text."""

__version__ = "1.0.0"

from .errors import ConversionError, JsonConvError, ParseError
from .xml_converter import XmlOptions, build_xml_tree, convert_to_xml

__all__ = [
    "ConversionError",
    "JsonConvError",
    "ParseError",
    "XmlOptions",
    "build_xml_tree",
    "convert_to_xml",
]
