"""
ddcompute - API Endpoint Constants

This module contains the compute API URI prefixes, endpoint templates and
well-known response codes used throughout the client.
Endpoints are relative to the protocol prefix of their API generation.
"""

# Base address template (formatted with the region identifier)
BASE_ADDRESS_TEMPLATE = "https://api-{region}.dimensiondata.com"

# Protocol prefixes
API_V1_PREFIX = "oec/0.9"    # Legacy protocol (XML)
API_V22_PREFIX = "caas/2.2"  # Current protocol (JSON)

# Content types
CONTENT_TYPE_XML = "text/xml"
CONTENT_TYPE_JSON = "application/json"

# Environment
ENV_EXTENDED_LOGGING = "DD_COMPUTE_EXTENDED_LOGGING"

# Retry defaults
DEFAULT_MAX_RETRY_COUNT = 0
DEFAULT_RETRY_DELAY = 0.0
INVALID_RETRY_DELAY_FALLBACK = 5.0

# Account (legacy)
API_V1_MY_ACCOUNT = "myaccount"

# Network Domains
API_NETWORK_DOMAIN_LIST = "{org_id}/network/networkDomain"
API_NETWORK_DOMAIN_GET = "{org_id}/network/networkDomain/{id}"
API_NETWORK_DOMAIN_DEPLOY = "{org_id}/network/deployNetworkDomain"
API_NETWORK_DOMAIN_DELETE = "{org_id}/network/deleteNetworkDomain"

# NAT Rules
API_NAT_RULE_LIST = "{org_id}/network/natRule"
API_NAT_RULE_GET = "{org_id}/network/natRule/{id}"
API_NAT_RULE_CREATE = "{org_id}/network/createNatRule"
API_NAT_RULE_DELETE = "{org_id}/network/deleteNatRule"

# Images
API_OS_IMAGE_LIST = "{org_id}/image/osImage"
API_OS_IMAGE_GET = "{org_id}/image/osImage/{id}"
API_CUSTOMER_IMAGE_LIST = "{org_id}/image/customerImage"
API_CUSTOMER_IMAGE_GET = "{org_id}/image/customerImage/{id}"

# Response codes (current protocol)
RESPONSE_CODE_OK = "OK"
RESPONSE_CODE_IN_PROGRESS = "IN_PROGRESS"
RESPONSE_CODE_RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
RESPONSE_CODE_UNKNOWN = "UNKNOWN_RESPONSE_CODE"

# Results (legacy protocol)
RESULT_SUCCESS = "SUCCESS"
RESULT_UNKNOWN = "UNKNOWN_RESULT"

UNEXPECTED_RESPONSE_MESSAGE = "An unexpected response was received from the compute API."

# Field messages
FIELD_NAT_RULE_ID = "natRuleId"
FIELD_NETWORK_DOMAIN_ID = "networkDomainId"
