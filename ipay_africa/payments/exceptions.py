"""
Payment System Exceptions
Custom exceptions for iPay payment processing.
"""


class PaymentException(Exception):
    """Base exception for payment-related errors."""
    pass


class PaymentGatewayException(PaymentException):
    """Exception raised when the payment gateway returns an error."""
    def __init__(self, message, gateway_response=None):
        super().__init__(message)
        self.gateway_response = gateway_response


class PaymentValidationException(PaymentException):
    """Exception raised when payment data validation fails."""
    pass


class PaymentMethodNotSupportedException(PaymentException):
    """Exception raised when an unsupported payment method is used."""
    pass


class PaymentGatewayNotConfiguredException(PaymentException):
    """Exception raised when the payment gateway is not properly configured."""
    pass
