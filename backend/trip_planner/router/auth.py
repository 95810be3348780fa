"""
Account registration and login
"""

from fastapi import APIRouter, Depends, HTTPException

from trip_planner.db.stores import DuplicateUsernameError, UserStore
from trip_planner.dependencies import get_user_store
from trip_planner.models.user import AuthResponse, LoginRequest, RegisterRequest, User, UserInfo
from trip_planner.services.passwords import hash_password, verify_password

router = APIRouter(tags=["authentication"])

MIN_USERNAME_LENGTH = 5
MIN_PASSWORD_LENGTH = 8
INVALID_CREDENTIALS = "Invalid username or password"
USERNAME_TAKEN = "Username already exists"


def validate_registration(body: RegisterRequest) -> str | None:
    """Return the first registration rule `body` breaks, or None."""
    if not body.username or len(body.username) < MIN_USERNAME_LENGTH:
        return f"Username must be at least {MIN_USERNAME_LENGTH} characters"
    if not body.password or len(body.password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    if body.password != body.confirm_password:
        return "Passwords do not match"
    return None


@router.post("/register", response_model=AuthResponse)
async def register(body: RegisterRequest, users: UserStore = Depends(get_user_store)):
    """
    Create an account.

    Validation failures and taken usernames are reported as 400. The password
    is hashed before anything is stored.
    """
    print(f"[auth] Registration request for username={body.username!r}")

    problem = validate_registration(body)
    if problem:
        print(f"[auth] Registration rejected: {problem}")
        raise HTTPException(status_code=400, detail=problem)

    try:
        if await users.find_by_username(body.username):
            print(f"[auth] Username already exists: {body.username}")
            raise HTTPException(status_code=400, detail=USERNAME_TAKEN)

        user = User(username=body.username, password_hash=hash_password(body.password))
        user_id = await users.insert(user)
    except HTTPException:
        raise
    except DuplicateUsernameError:
        # Lost a race with a concurrent registration for the same name
        raise HTTPException(status_code=400, detail=USERNAME_TAKEN)
    except Exception as e:
        print(f"[auth] Registration error: {e}")
        raise HTTPException(status_code=500, detail={"error": "Server error", "details": str(e)})

    print(f"[auth] User created successfully: {user.username}")
    return AuthResponse(
        message="Account created successfully",
        user=UserInfo(id=user_id, username=user.username),
    )


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, users: UserStore = Depends(get_user_store)):
    """
    Check a username/password pair.
    Unknown usernames and wrong passwords get the same 401 response.
    """
    try:
        user = await users.find_by_username(body.username) if body.username else None
    except Exception as e:
        print(f"[auth] Login error: {e}")
        raise HTTPException(status_code=500, detail={"error": "Server error", "details": str(e)})

    if user is None or not verify_password(body.password or "", user.password_hash):
        raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)

    return AuthResponse(
        message="Login successful",
        user=UserInfo(id=user.id, username=user.username),
    )
