import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from courseportal.core import config
from courseportal.database import MongoContext, ensure_indexes
from courseportal.routes import course_routes, enrollment_routes, user_routes

logging.basicConfig(level=config.LOG_LEVEL)

app = FastAPI(title='Course Portal API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def connect_database() -> None:
    config.validate_runtime_config()
    mongo = MongoContext(config.MONGODB_URI, config.MONGODB_DB_NAME)
    try:
        db = mongo.connect()
        if config.MONGODB_ENSURE_INDEXES:
            ensure_indexes(db)
    except PyMongoError:
        logger.exception('Database initialization failed. Check MONGODB_URI and network access.')
        mongo.close()
        raise
    app.state.mongo = mongo


@app.on_event('shutdown')
def close_database() -> None:
    mongo = getattr(app.state, 'mongo', None)
    if mongo is not None:
        mongo.close()


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={'error': exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = exc.errors()[0]
    location = [str(part) for part in error['loc'] if part not in ('body', 'query', 'path')]
    field = '.'.join(location) or 'body'
    return JSONResponse(status_code=400, content={'error': f"{field}: {error['msg']}"})


@app.exception_handler(PyMongoError)
async def database_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.exception('Database error on %s %s', request.method, request.url.path)
    return JSONResponse(status_code=500, content={'error': 'Internal server error'})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception('Unhandled error on %s %s', request.method, request.url.path)
    return JSONResponse(status_code=500, content={'error': 'Internal server error'})


@app.get('/')
def root():
    return {'status': 'Course Portal API Running'}


app.include_router(user_routes.router)
app.include_router(course_routes.router)
app.include_router(enrollment_routes.router)


if __name__ == '__main__':
    import uvicorn

    uvicorn.run(app, host='0.0.0.0', port=config.PORT)
