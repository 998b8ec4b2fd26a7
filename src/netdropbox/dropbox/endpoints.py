"""
Dropbox API endpoint definitions.

Paths are relative to the version prefix (``https://<host>/0/``).
``{root_path}`` is the configured context followed by the percent-encoded
path, e.g. ``sandbox/Photos/2010``.

Documentation: https://www.dropbox.com/developers/web_docs (version 0 API)
"""

# Hosts
API_HOST = "api"
CONTENT_HOST = "api-content"

# Account
ACCOUNT_INFO = "account/info"

# Files & metadata
FILES = "files/{root_path}"
METADATA = "metadata/{root_path}"

# File operations
FILEOPS_COPY = "fileops/copy"
FILEOPS_MOVE = "fileops/move"
FILEOPS_CREATE_FOLDER = "fileops/create_folder"
FILEOPS_DELETE = "fileops/delete"
FILEOPS_LINKS = "fileops/links/{root_path}"
