"""
Validation rules for the forms the API accepts
"""
from beloved.core.forms import chain, email_format, min_length, one_of, phone_format, required
from beloved.models.driver_profile import DriverStatus
from beloved.models.profile import ProfileStatus
from beloved.models.ride import PaymentMethod


def _address_required(message: str):
    def rule(value, values):
        if not value or not str(value.get("address", "")).strip():
            return message
        return None
    return rule


_full_name = chain(
    required("Full name is required"),
    min_length(2, "Name must be at least 2 characters"),
)
_email = chain(required("Email is required"), email_format("Invalid email format"))
_phone = chain(
    required("Phone number is required"),
    phone_format("Invalid phone number format"),
)

SIGNUP_FORM_RULES = {
    "full_name": _full_name,
    "email": _email,
    "phone": _phone,
    "password": chain(
        required("Password is required"),
        min_length(8, "Password must be at least 8 characters"),
    ),
}

MEMBER_FORM_RULES = {
    "full_name": _full_name,
    "email": _email,
    "phone": _phone,
    "status": one_of(ProfileStatus, "Status is invalid"),
}

DRIVER_FORM_RULES = {
    "full_name": _full_name,
    "email": _email,
    "phone": _phone,
    "username": chain(
        required("Username is required"),
        min_length(3, "Username must be at least 3 characters"),
    ),
}

DRIVER_PROFILE_FORM_RULES = {
    "license_number": required("Driver license number is required"),
    "vehicle_make": required("Vehicle make is required"),
    "vehicle_model": required("Vehicle model is required"),
    "vehicle_year": required("Vehicle year is required"),
    "vehicle_color": required("Vehicle color is required"),
    "vehicle_plate": required("License plate is required"),
    "status": one_of(DriverStatus, "Status is invalid"),
}

PROFILE_UPDATE_FORM_RULES = {
    "full_name": _full_name,
    "phone": _phone,
}

RIDE_FORM_RULES = {
    "pickup_address": _address_required("Pickup address is required"),
    "dropoff_address": _address_required("Dropoff address is required"),
    "scheduled_pickup_time": required("Pickup time is required"),
    "payment_method": chain(
        required("Payment method is required"),
        one_of(PaymentMethod, "Payment method is invalid"),
    ),
}

MEMBER_NOTE_FORM_RULES = {
    "content": required("Note content cannot be empty"),
}
