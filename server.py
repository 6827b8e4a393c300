# Local entry point; production runs gunicorn with gunicorn_conf.py
from marinavision.main import app

if __name__ == "__main__":
    import os, uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", "8080")))
