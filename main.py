import logging
from contextlib import asynccontextmanager

import firebase_admin
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from firebase_admin import credentials
from starlette.middleware.cors import CORSMiddleware

from config import settings
from models.post import TEXT_REQUIRED
from routes.posts import router as posts_router
from services.errors import PostServiceError
from services.firestore import FirestoreDB
from services.posts import PostService

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

# user-facing messages for body fields, keyed by field name
FIELD_MESSAGES = {
    "text": TEXT_REQUIRED,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize Firebase Admin SDK
    cred = credentials.Certificate(settings.firebase_credentials_path)
    options = {"projectId": settings.firebase_project_id} if settings.firebase_project_id else None
    firebase_app = firebase_admin.initialize_app(cred, options)

    # Initialize dependencies
    firestore = FirestoreDB(
        firebase_app,
        posts_collection=settings.posts_collection,
        users_collection=settings.users_collection
    )
    app.state.post_service = PostService(firestore)
    logging.info("Firestore store ready (posts=%s, users=%s)",
                 settings.posts_collection, settings.users_collection)

    yield
    # Cleanup resources
    try:
        firestore.close()
    finally:
        firebase_admin.delete_app(firebase_app)
        logging.info("Firestore store closed")


app = FastAPI(lifespan=lifespan)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PostServiceError)
async def handle_post_service_error(request: Request, err: PostServiceError):
    logging.info("%s %s -> %s %s", request.method, request.url.path, err.status_code, err.message)
    return JSONResponse(status_code=err.status_code, content={"msg": err.message})


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, err: RequestValidationError):
    errors = []
    for error in err.errors():
        location = error["loc"][0] if error["loc"] else "body"
        param = str(error["loc"][-1]) if len(error["loc"]) > 1 else None
        errors.append({
            "msg": FIELD_MESSAGES.get(param, error["msg"]),
            "param": param,
            "location": location,
        })
    return JSONResponse(status_code=400, content={"errors": errors})


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, err: Exception):
    logging.error(str(err))
    return JSONResponse(status_code=500, content={"msg": "Server error"})


# Include routers
app.include_router(posts_router, prefix=f"{settings.api_prefix}/post", tags=["posts"])
