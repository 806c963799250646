import os
import tempfile

# Keep module-import side effects (app DB creation) out of the repo's data/ directory.
os.environ.setdefault("COACHHUB_DATA_ROOT", tempfile.mkdtemp(prefix="coachhub-tests-"))
