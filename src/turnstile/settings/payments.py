from decouple import config

PAYMENT_CURRENCY = config("PAYMENT_CURRENCY", default="INR")
# Shared secret the payment gateway signs its callbacks with.
PAYMENT_GATEWAY_SECRET = config("PAYMENT_GATEWAY_SECRET", default="gateway-secret-change-me")
