from workwithme.client.admin import AdminSession
from workwithme.client.api import ApiClient, ApiError
from workwithme.client.wizard import QuestionnaireWizard, view_shared_profile

__all__ = ["AdminSession", "ApiClient", "ApiError", "QuestionnaireWizard", "view_shared_profile"]
