# Database models
from .application import Application, PAYMENT_STATUS_PENDING
