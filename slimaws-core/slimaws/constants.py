import os

import slimaws

# slimaws version
VERSION = slimaws.__version__

# user agent sent with every request
USER_AGENT = f"slimaws/{VERSION}"

# region used when neither the call, the client, nor the environment specifies one
AWS_REGION_US_EAST_1 = "us-east-1"
DEFAULT_REGION = AWS_REGION_US_EAST_1

# HTTP headers
HEADER_AMZN_REQUEST_ID = "X-Amzn-RequestId"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_USER_AGENT = "User-Agent"

# content types
APPLICATION_X_WWW_FORM_URLENCODED = "application/x-www-form-urlencoded; charset=utf-8"

# the key of a plain input mapping that overrides the region of a single call
REGION_INPUT_KEY = "@region"

# signature versions
SIGNATURE_V4 = "v4"

# root code folder
MODULE_MAIN_PATH = os.path.dirname(os.path.realpath(__file__))

# folder holding the bundled service descriptions and endpoint tables
DATA_FOLDER = os.path.join(MODULE_MAIN_PATH, "aws", "data")

# strings that are interpreted as boolean values in environment variables
TRUE_STRINGS = ("1", "true", "True")
FALSE_STRINGS = ("0", "false", "False")

# log levels accepted by SLIMAWS_LOG
LOG_LEVELS = ("trace", "debug", "info", "warn", "error", "warning")
SLIMAWS_LOG_TRACE = "trace"
TRACE_LOG_LEVELS = [SLIMAWS_LOG_TRACE]
