from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend


class PhoneOrUsernameBackend(ModelBackend):
    """Members sign in with their phone number; staff may still use a username."""

    def authenticate(self, request, username=None, password=None, phone=None, **kwargs):
        identifier = phone or username
        if not identifier or password is None:
            return None
        usermodel = get_user_model()
        try:
            user = usermodel.objects.get(phone=identifier.strip())
        except usermodel.DoesNotExist:
            try:
                user = usermodel.objects.get(username__iexact=identifier)
            except usermodel.DoesNotExist:
                return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user

        return None
