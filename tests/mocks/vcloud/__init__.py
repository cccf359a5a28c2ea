"""
vCloud Director fakes for testing
"""
from .documents import error_xml, task_xml, vapp_xml, versions_xml
from .server import FakeVCloud, XML

__all__ = [
    'FakeVCloud',
    'XML',
    'error_xml',
    'task_xml',
    'vapp_xml',
    'versions_xml',
]
