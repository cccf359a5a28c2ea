"""
Example usage of the vcloud-rest library
"""

import logging
import os
from vcloud_rest import (InvokerSettings, RequestInvoker, RequestSpec, Credential, TaskResult,
                         get_highest_supported_version, invoke)

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')

# Use environment variables for security: export VCD_JWT=your_token
host = os.getenv("VCD_HOST", "vcd.example.com")
jwt = os.getenv("VCD_JWT", "your_token_here")
settings = InvokerSettings()

# Pick the API version once and reuse it for every call
version = get_highest_supported_version(host, settings.api_timeout, settings.skip_cert_check)
print(f"Using API version {version}")

# Plain GET, the parsed XML document comes back
org_list = invoke(f"https://{host}/api/org", api_version=version, jwt=jwt,
                  skip_cert_check=settings.skip_cert_check)
for org in org_list:
    print(f"Org: {org.get('name')}")


def show_progress(status, task):
    print(f"  ... {status.value if status else 'unknown status'}")


# Power on a vApp and wait for the resulting task
invoker = RequestInvoker(settings=settings, progress=show_progress)
spec = RequestSpec(f"https://{host}/api/vApp/vapp-1234/power/action/powerOn", method="POST")
result = invoker.invoke(spec, version, Credential(jwt=jwt), wait_for_task=True)

if not isinstance(result, TaskResult):
    print("vApp was already powered on")
elif result:
    print("vApp powered on")
elif result.timed_out:
    print(f"Still {result.last_status} after {result.polls} polls, check the task later: {result.href}")
else:
    print(f"Power on {result.outcome.value}: {result.error_message}")

# Rename the vApp; body and content type always go together
spec = RequestSpec(
    f"https://{host}/api/vApp/vapp-1234",
    method="PUT",
    content_type="application/vnd.vmware.vcloud.vApp+xml",
    body='<VApp xmlns="http://www.vmware.com/vcloud/v1.5" name="web-02"/>',
)
result = invoker.invoke(spec, version, Credential(jwt=jwt), wait_for_task=True)
if isinstance(result, TaskResult):
    result.raise_for_outcome()
