"""
User-facing wording of the booking conversation.
"""

WELCOME = 'Welcome to Medlink! Send "book hospital" to start booking.'
NO_HOSPITALS = "No hospitals found. Please try again later."
BOOKING_CONFIRMED_AMBULANCE = "Booking confirmed! An ambulance will be dispatched."
BOOKING_CONFIRMED_NO_AMBULANCE = "Booking confirmed! Please arrive at the hospital."
AMBULANCE_REPROMPT = "Please tap Yes or No to tell us whether you need an ambulance."
GENERIC_ERROR = "Sorry, there was an error. Please try again."


def booking_confirmed(requires_ambulance: bool) -> str:
    if requires_ambulance:
        return BOOKING_CONFIRMED_AMBULANCE
    return BOOKING_CONFIRMED_NO_AMBULANCE
