from rest_framework import status
from rest_framework.response import Response


def success_response(data=None, message=None, status_code=status.HTTP_200_OK):
    """The uniform ``{success, message?, data?}`` envelope"""
    body = {'success': True}
    if message is not None:
        body['message'] = message
    if data is not None:
        body['data'] = data
    return Response(body, status=status_code)


def created_response(data=None, message=None):
    return success_response(data, message, status_code=status.HTTP_201_CREATED)
