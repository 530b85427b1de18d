from .twilio_lookup import TwilioLineTypeClassifier

__all__ = [
    "TwilioLineTypeClassifier",
]
