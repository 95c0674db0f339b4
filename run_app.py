from __future__ import annotations

from gate import create_app
from gate.config import PORT

app = create_app()

if __name__ == "__main__":
    app.logger.info("Server running on http://localhost:%s", PORT)
    app.run(host="0.0.0.0", port=PORT)
