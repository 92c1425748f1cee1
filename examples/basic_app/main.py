"""
Basic Eagle Compress Example

Serves a few routes whose responses exercise the compression decisions:

    curl -s -D - -H "Accept-Encoding: gzip" http://127.0.0.1:8000/ -o /dev/null
    curl -s -D - -H "Accept-Encoding: deflate" http://127.0.0.1:8000/report -o /dev/null
    curl -s -D - -H "Accept-Encoding: gzip" http://127.0.0.1:8000/pixel.png -o /dev/null
"""
import base64

from fastapi.responses import PlainTextResponse, Response

from eaglecompress import create_app

# Create the application
app = create_app(
    title="Eagle Compress Example App",
    description="A basic example of response compression",
)

# 1x1 transparent PNG
PIXEL = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)

# Routes
@app.get("/")
async def read_root():
    return {"message": "Welcome to Eagle Compress!", "items": list(range(200))}

@app.get("/report", response_class=PlainTextResponse)
async def report():
    """A long, repetitive plain-text body; compresses well."""
    return "\n".join(f"line {i}: all systems nominal" for i in range(500))

@app.get("/pixel.png")
async def pixel():
    """Binary content; never compressed under the default rules."""
    return Response(content=PIXEL, media_type="image/png")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True)
