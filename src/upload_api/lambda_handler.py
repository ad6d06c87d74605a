"""AWS Lambda entry point for the Upload API."""
from mangum import Mangum
from upload_api.main import create_app

# Settings come from the function's environment variables
app = create_app()

# API Gateway and function URL events are translated to ASGI requests;
# the app has no startup or shutdown hooks
lambda_handler = Mangum(app, lifespan="off")
