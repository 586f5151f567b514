from django.urls import path

from .views import internship_application, landing, offer_letter

urlpatterns = [
    path("", landing, name="landing"),
    path("api/internship-application", internship_application, name="internship_application"),
    path("api/offer-letter", offer_letter, name="offer_letter"),
]
