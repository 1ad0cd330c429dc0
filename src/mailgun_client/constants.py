"""Fixed values shared by the Mailgun REST client."""

API_USER = "api"
SDK_USER_AGENT = "mailgun-sdk-python"
SDK_VERSION = "0.1.0"

DEFAULT_API_HOST = "api.mailgun.net"
DEFAULT_API_VERSION = "v3"

# File groups accepted by RestClient.post(), in the order parts are emitted
FILE_FIELDS = ("message", "attachment", "inline")

EXCEPTION_GENERIC_HTTP_ERROR = (
    "An HTTP Error has occurred! Check your network connection and try again."
)
EXCEPTION_INVALID_CREDENTIALS = "Your credentials are incorrect."
EXCEPTION_MISSING_REQUIRED_PARAMETERS = (
    "The parameters passed to the API were invalid. Check your inputs!"
)
EXCEPTION_MISSING_ENDPOINT = (
    "The endpoint you've tried to access does not exist. Check your URL."
)
