from decouple import config

# Codes that unlock staff and organizer sign-up. An empty code closes that route.
STAFF_SIGNUP_CODE = config("STAFF_SIGNUP_CODE", default="")
ORGANIZER_SIGNUP_CODE = config("ORGANIZER_SIGNUP_CODE", default="")
