"""Root conftest: keep logs and recovery copies out of the real home dir."""

import os
import tempfile

os.environ.setdefault("POCKET_NOTES_HOME", tempfile.mkdtemp(prefix="pocket-notes-test-"))
