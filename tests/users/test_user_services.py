from dataclasses import replace
from datetime import date

import pytest
from werkzeug.security import check_password_hash

from dayflow.core.enums import Role
from dayflow.core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from dayflow.users.service import NewEmployee


def _new(name="John Doe", email="john@example.com", role="employee") -> NewEmployee:
    return NewEmployee.from_payload(
        {"name": name, "email": email, "role": role, "department": "Engineering", "dateJoined": "2025-02-01"},
        today=date(2025, 3, 10),
    )


def test_authenticate_by_login_id_and_email(services, repos, password):
    by_login = services.auth_service.authenticate(repos.alice.login_id, password)
    by_email = services.auth_service.authenticate("USER3@example.com", password)

    assert by_login.user_id == by_email.user_id == 3
    assert by_login.role == Role.EMPLOYEE


@pytest.mark.parametrize("login, password", [("user3@example.com", "wrong"), ("nobody", "x"), ("", "")])
def test_authenticate_rejects_bad_credentials(services, login, password):
    with pytest.raises(AuthenticationError):
        services.auth_service.authenticate(login, password)


def test_create_employee_generates_login_id_and_password(services, repos):
    user, password = services.employee_service.create_employee(current_role=Role.ADMIN, company_id=1, data=_new())

    assert user.login_id == "OIJODO20250001"
    assert user.company_id == 1
    assert user.is_first_login
    assert check_password_hash(repos.users.get_by_id(user.user_id).password_hash, password)

    second, _ = services.employee_service.create_employee(
        current_role=Role.ADMIN, company_id=1, data=_new("Jane Roe", "jane@example.com")
    )
    assert second.login_id == "OIJARO20250002"


def test_create_employee_rejects_duplicate_email(services):
    with pytest.raises(ValidationError):
        services.employee_service.create_employee(
            current_role=Role.ADMIN, company_id=1, data=_new(email="user3@example.com")
        )


def test_only_admin_creates_employees(services):
    with pytest.raises(AuthorizationError):
        services.employee_service.create_employee(current_role=Role.HR, company_id=1, data=_new())


def test_admin_accounts_cannot_be_created(services):
    with pytest.raises(ValidationError):
        services.employee_service.create_employee(current_role=Role.ADMIN, company_id=1, data=_new(role="admin"))


def test_new_employee_rejects_bad_role():
    with pytest.raises(ValidationError):
        _new(role="ceo")


def test_reset_password_forces_first_login(services, repos):
    password = services.employee_service.reset_password(current_role=Role.ADMIN, company_id=1, user_id=3)

    user = repos.users.get_by_id(3)
    assert user.is_first_login
    assert check_password_hash(user.password_hash, password)


def test_reset_password_other_company(services):
    with pytest.raises(NotFoundError):
        services.employee_service.reset_password(current_role=Role.ADMIN, company_id=1, user_id=5)


def test_change_password(services, password):
    services.employee_service.change_password(user_id=3, current_password=password, new_password="n3w-passw0rd")

    assert services.auth_service.authenticate("user3@example.com", "n3w-passw0rd").user_id == 3
    with pytest.raises(AuthenticationError):
        services.employee_service.change_password(user_id=3, current_password=password, new_password="whatever12")


def test_change_password_enforces_length(services, password):
    with pytest.raises(ValidationError):
        services.employee_service.change_password(user_id=3, current_password=password, new_password="short")


@pytest.mark.parametrize("role", [3, ["hr"], {"name": "hr"}])
def test_new_employee_rejects_non_text_role(role):
    with pytest.raises(ValidationError, match="Role"):
        _new(role=role)


def test_change_password_with_unreadable_stored_hash(services, repos):
    repos.users.users[3] = replace(repos.users.get_by_id(3), password_hash="not-a-hash")

    with pytest.raises(AuthenticationError):
        services.employee_service.change_password(user_id=3, current_password="anything", new_password="n3w-passw0rd")


def test_profile_defaults_to_own_account(services):
    profile = services.employee_service.get_profile(current_user_id=3, current_role=Role.EMPLOYEE, company_id=1, employee_id=4)

    assert profile.user.user_id == 3
    assert profile.to_dict()["company"] == {"id": 1, "name": "Odoo India", "initials": "OI"}


def test_hr_can_open_another_profile_in_company(services):
    profile = services.employee_service.get_profile(current_user_id=2, current_role=Role.HR, company_id=1, employee_id=4)
    assert profile.user.full_name == "Bob Jones"

    with pytest.raises(NotFoundError):
        services.employee_service.get_profile(current_user_id=2, current_role=Role.HR, company_id=1, employee_id=5)


def test_employee_edits_only_contact_fields(services, repos):
    profile = services.employee_service.update_profile(
        current_user_id=3,
        current_role=Role.EMPLOYEE,
        company_id=1,
        payload={"name": " Alice Cooper ", "phone": "+91 98765 43210", "department": "Finance", "role": "admin"},
    )

    assert profile.user.full_name == "Alice Cooper"
    assert profile.user.phone == "+91 98765 43210"
    stored = repos.users.get_by_id(3)
    assert stored.department == "Engineering"
    assert stored.role == Role.EMPLOYEE


def test_admin_sets_department_and_job_title(services, repos):
    services.employee_service.update_profile(
        current_user_id=1,
        current_role=Role.ADMIN,
        company_id=1,
        payload={"department": "Finance", "jobTitle": "Analyst", "address": ""},
        employee_id=3,
    )

    stored = repos.users.get_by_id(3)
    assert (stored.department, stored.job_title, stored.address) == ("Finance", "Analyst", None)


@pytest.mark.parametrize(
    "payload",
    [{}, {"department": "Finance"}, {"name": "  "}, {"phone": 12345}, {"phone": "1" * 31}],
)
def test_profile_update_rejects_bad_input(services, payload):
    with pytest.raises(ValidationError):
        services.employee_service.update_profile(
            current_user_id=3, current_role=Role.EMPLOYEE, company_id=1, payload=payload
        )
