import os
import tempfile

# keep logs / recovery copies of the test run out of the real home directory
os.environ.setdefault("NOTE_UNIVERSE_HOME", tempfile.mkdtemp(prefix="note-universe-test-"))
