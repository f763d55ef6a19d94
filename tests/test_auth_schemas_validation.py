import pytest
from pydantic import ValidationError

from jobtracker.schemas.application import ApplicationCreate, ApplicationUpdate
from jobtracker.schemas.auth import UserLogin, UserProfileUpdate, UserRegister


def test_user_register_validators():
    with pytest.raises(ValidationError):
        UserRegister(username="ab", email="u@example.com", password="longenough")
    with pytest.raises(ValidationError):
        UserRegister(username="abc", email="u@example.com", password="short")
    with pytest.raises(ValidationError):
        UserRegister(username="abc", email="not-an-email", password="longenough")
    assert UserRegister(username="  abc  ", email="u@example.com", password="123456").username == "abc"


def test_user_login_requires_both():
    with pytest.raises(ValidationError, match="Username and password are required"):
        UserLogin(username="  ", password="secret123")
    with pytest.raises(ValidationError):
        UserLogin(username="alice", password="")


def test_user_profile_update_password_change_validators():
    with pytest.raises(ValidationError, match="Current password is required"):
        UserProfileUpdate(new_password="newpassword1")
    with pytest.raises(ValidationError, match="at least 6"):
        UserProfileUpdate(current_password="oldpassword", new_password="short")
    ok = UserProfileUpdate(current_password="oldpassword", new_password="newpassword1")
    assert ok.new_password == "newpassword1"


def test_user_profile_update_blank_values_mean_unchanged():
    data = UserProfileUpdate(username="  ", email="", new_password="")
    assert data.username is None
    assert data.email is None
    assert data.new_password is None


def test_application_create_defaults_and_aliases():
    data = ApplicationCreate.model_validate(
        {"companyName": " Acme ", "status": "OFFER", "positionType": "Leads To Full Time"}
    )
    assert data.company_name == "Acme"
    assert data.status == "Offer Received"
    assert data.position_type == "Leads to Full Time"

    fields = ApplicationCreate(company_name="Globex").to_fields()
    assert fields["status"] == "Applied"
    assert fields["position_type"] == "Full-time"
    assert fields["is_private"] is False
    assert "application_date" not in fields


def test_application_create_rejects_negative_numbers():
    with pytest.raises(ValidationError):
        ApplicationCreate(company_name="Acme", interview_rounds=-1)
    with pytest.raises(ValidationError):
        ApplicationCreate(company_name="Acme", salary_expectation=-5)


def test_application_update_only_carries_sent_fields():
    changes = ApplicationUpdate.model_validate({"notes": " call back ", "nextActionDate": None}).to_changes()
    assert changes == {"notes": "call back", "next_action_date": None}

    with pytest.raises(ValidationError, match="status cannot be null"):
        ApplicationUpdate.model_validate({"status": None})
