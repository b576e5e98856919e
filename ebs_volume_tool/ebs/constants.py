"""
Constants for EBS operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

# EC2 Query API
API_VERSION = "2016-11-15"
DEFAULT_ENDPOINT = "https://ec2.amazonaws.com"
DEFAULT_CLI_ENDPOINT = "https://ec2.eu-west-1.amazonaws.com"
DEFAULT_REGION = "us-east-1"
SIGNING_SERVICE = "ec2"
HTTP_TIMEOUT = 30.0  # seconds per request

# Volume types
VOLUME_TYPE_PIOPS = "io1"
VOLUME_TYPE_SSD = "gp2"
VOLUME_TYPE_MAGNETIC = "standard"
DEFAULT_VOLUME_SIZE = 10  # GiB

# Tags
NAME_TAG = "Name"
MIGRATION_SNAPSHOT_DESCRIPTION = "migrate_zone"

# Device allocation
DATA_DEVICE_PREFIX = "/dev/sd"
FIRST_DATA_DEVICE = "/dev/sdf"
LAST_DATA_DEVICE = "/dev/sdz"

# Polling behavior
POLL_INTERVAL = 1.0  # seconds between status checks
POLL_TIMEOUT = 30.0  # overall deadline per wait

# CLI exit codes
EXIT_ERROR = 1
EXIT_VALIDATION = 2
EXIT_NOT_FOUND = 3
EXIT_TIMEOUT = 4
