from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.utils.responses import response_json


def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """GET /health: liveness check, touches no data store."""
    return response_json(200, {'status': 'healthy'})
