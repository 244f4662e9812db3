from rest_framework import status
from rest_framework.exceptions import APIException


class StoreClosedError(APIException):
    """Raised by the order gate when the shop is not accepting orders."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Store is currently closed'
    default_code = 'store_closed'

    def __init__(self, store_status):
        self.store_status = store_status.status
        self.store_message = store_status.message
        super().__init__(detail={
            'status': store_status.status,
            'message': store_status.message,
        })


class DuplicateHolidayError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Holiday for this date already exists'
    default_code = 'duplicate_holiday'
