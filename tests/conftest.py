import pytest

SAMPLE_PRD = """Product requirements for the ordering platform.
This preamble sits above the first heading.

# Overview
The "Order Hub" lets every user place and track orders.
Admin staff manage the catalogue through a web app.

## Goals
Reduce checkout time and give developers a stable API.

# Authentication Module
Users sign in with email. The system stores sessions in the database.

## Login
The login feature validates credentials against the auth service.

### Password Reset
A user can request a reset link by email.

## Session Management
Sessions expire after 30 minutes of inactivity.

# Reporting Module
Stakeholders download monthly reports built with React and PostgreSQL.
"""


@pytest.fixture
def sample_prd() -> str:
    return SAMPLE_PRD
