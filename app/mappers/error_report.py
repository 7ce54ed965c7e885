import xml.etree.ElementTree as ET

ERROR_CODE = "5"
ERROR_TYPE = "5"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def render_error_report(messages: list[str]) -> str:
    """Render rejection messages as an XML document, one <applicationErrors> block each."""
    root = ET.Element("AvailRS")
    for message in messages:
        block = ET.SubElement(root, "applicationErrors")
        ET.SubElement(block, "code").text = ERROR_CODE
        ET.SubElement(block, "type").text = ERROR_TYPE
        ET.SubElement(block, "description").text = message
        ET.SubElement(block, "httpStatusCode").text = "0"
    ET.indent(root)
    return XML_DECLARATION + ET.tostring(root, encoding="unicode")
