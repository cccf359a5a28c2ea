"""
Unit tests for HTTP client and document helpers
"""

import httpx
import pytest
from lxml import etree
from vcloud_rest.exceptions import RequestFailedError
from vcloud_rest.transport import (build_client, error_details, find_task, parse_document,
                                   task_fields, task_href, send)
from tests.mocks.vcloud import error_xml, task_xml, vapp_xml

URL = "https://vcd.example.com/api/vApp/vapp-42"


def response(status_code=200, text="", content_type=None):
    headers = {"content-type": content_type} if content_type else {}
    return httpx.Response(status_code, text=text, headers=headers,
                          request=httpx.Request("GET", URL))


class TestBuildClient:
    """Test cases for build_client"""

    def test_timeout_applied(self):
        """Test timeout applied"""
        with build_client(25) as client:
            assert client.timeout.read == 25
            assert client.timeout.connect == 25

    def test_injected_transport_used(self):
        """Test injected transport used"""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="ok"))

        with build_client(10, transport=transport) as client:
            assert client.get(URL).text == "ok"


    def test_redirects_not_followed(self):
        """Test the client does not follow redirects"""
        with build_client(10) as client:
            assert client.follow_redirects is False


class TestSend:
    """Test cases for send"""

    def test_redirect_is_a_failure(self):
        """Test a 3xx answer raises RequestFailedError and is not followed"""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(301, headers={"location": "https://other.example.net/"})

        with build_client(10, transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(RequestFailedError) as exc_info:
                send(client, "GET", URL, {"x-vcloud-authorization": "token"})

        assert exc_info.value.code == 301
        assert len(seen) == 1

    def test_success_returns_response(self):
        """Test a 2xx answer is handed back unchanged"""
        transport = httpx.MockTransport(lambda request: httpx.Response(202, text="<Task/>"))

        with build_client(10, transport=transport) as client:
            assert send(client, "POST", URL, {}).status_code == 202


class TestParseDocument:
    """Test cases for parse_document"""

    def test_xml(self):
        """Test XML bodies are parsed with lxml"""
        document = parse_document(response(text=vapp_xml(URL), content_type="application/vnd.vmware.vcloud.vApp+xml"))
        assert etree.QName(document).localname == "VApp"

    def test_xml_without_content_type(self):
        """Test XML without content type"""
        document = parse_document(response(text="<OrgList/>"))
        assert document.tag == "OrgList"

    def test_json(self):
        """Test JSON bodies are decoded"""
        assert parse_document(response(text='{"a": 1}', content_type="application/json")) == {"a": 1}

    def test_empty(self):
        """Test an empty body parses to None"""
        assert parse_document(response(status_code=204)) is None

    def test_plain_text(self):
        """Test plain text"""
        assert parse_document(response(text="pong", content_type="text/plain")) == "pong"

    def test_malformed_xml(self):
        """Test malformed XML"""
        with pytest.raises(RequestFailedError):
            parse_document(response(text="<VApp>", content_type="application/*+xml"))

    def test_malformed_json(self):
        """Test malformed JSON"""
        with pytest.raises(RequestFailedError):
            parse_document(response(text="{", content_type="application/json"))

    def test_entities_not_expanded(self):
        """Test entities not expanded"""
        text = ('<?xml version="1.0"?><!DOCTYPE r [<!ENTITY e SYSTEM "file:///etc/passwd">]>'
                '<r>&e;</r>')
        document = parse_document(response(text=text, content_type="application/xml"))
        assert "root:" not in etree.tostring(document).decode()


class TestErrorDetails:
    """Test cases for error_details"""

    def test_xml_error(self):
        """Test details from a vCloud Error document"""
        details = error_details(response(400, error_xml(400, "BAD_REQUEST", "Bad request"),
                                         "application/*+xml"))
        assert details == {
            'major_error_code': "400",
            'minor_error_code': "BAD_REQUEST",
            'message': "Bad request",
        }

    def test_not_an_error_document(self):
        """Test not an error document"""
        assert error_details(response(500, vapp_xml(URL), "application/*+xml")) == {}

    def test_unparseable(self):
        """Test an unparseable error body yields no details"""
        assert error_details(response(502, "<html", "text/html")) == {}


class TestFindTask:
    """Test cases for locating tasks in documents"""

    def test_root_task(self):
        """Test root task"""
        href = "https://vcd.example.com/api/task/1"
        document = etree.fromstring(task_xml(href, "queued").encode())
        assert task_href(document) == href

    def test_nested_task(self):
        """Test nested task"""
        href = "https://vcd.example.com/api/task/2"
        document = etree.fromstring(vapp_xml(URL, task_href=href).encode())
        assert task_href(document) == href

    def test_entity_without_task(self):
        """Test entity without task"""
        document = etree.fromstring(vapp_xml(URL).encode())
        assert find_task(document) is None

    def test_json_task(self):
        """Test a JSON task object"""
        task = {"href": "https://vcd.example.com/api/task/3", "status": "running",
                "type": "application/vnd.vmware.vcloud.task+json"}
        assert find_task(task) is task

    def test_json_nested_task(self):
        """Test JSON nested task"""
        task = {"href": "https://vcd.example.com/api/task/4", "status": "running"}
        assert task_href({"name": "web-01", "tasks": {"task": [task]}}) == task["href"]

    @pytest.mark.parametrize("media_type", [
        "application/vnd.vmware.vcloud.tasksList+json",
        "application/vnd.vmware.vcloud.query.records+json",
        "application/vnd.vmware.vcloud.taskRecord+json",
    ])
    def test_json_type_containing_task_is_not_a_task(self, media_type):
        """Test only the exact task media type marks a JSON document as a task"""
        document = {"href": "https://vcd.example.com/api/tasksList/org-1", "type": media_type}
        assert find_task(document) is None

    def test_json_task_type_with_parameters(self):
        """Test the task media type still matches with a version parameter"""
        task = {"href": "https://vcd.example.com/api/task/5", "status": "queued",
                "type": "application/vnd.vmware.vcloud.task+json;version=36.0"}
        assert find_task(task) is task

    @pytest.mark.parametrize("document", [None, "text", [], {"name": "web-01"}])
    def test_nothing(self, document):
        """Test documents without any task"""
        assert task_href(document) is None


class TestTaskFields:
    """Test cases for task_fields"""

    def test_xml_error_task(self):
        """Test status, error and operation of an XML task in error"""
        document = etree.fromstring(task_xml("h", "error", error="Disk full").encode())
        assert task_fields(document) == ("error", "Disk full", "Powering on vApp web-01")

    def test_json_task(self):
        """Test status, error and operation of a JSON task"""
        task = {"status": "aborted", "operation": "Deploy", "error": {"message": "stopped"}}
        assert task_fields(task) == ("aborted", "stopped", "Deploy")
