import logging

import uvicorn

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    print("Starting Timeline Article Store...")
    print("Docs available at: http://localhost:8000/docs")

    uvicorn.run(
        "timeline_store.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
