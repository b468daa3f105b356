from typing import List

from fastapi import APIRouter, Depends, HTTPException
from passlib.context import CryptContext

from railway_defects.dependencies.stores import get_user_store
from railway_defects.models.user import User
from railway_defects.schemas.user import UserCreate, UserStatusUpdate
from railway_defects.services.normalize import normalize_user

router = APIRouter()

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


@router.get("/users", response_model=List[User])
async def get_users(store=Depends(get_user_store)):
    try:
        users = [normalize_user(user) for user in await store.list_users()]
        print(f"Users returned: {len(users)}")
        return users
    except Exception as e:
        print(f"Error fetching users: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error fetching users: {str(e)}")


@router.post("/users", response_model=User, status_code=201)
async def create_user(user: UserCreate, store=Depends(get_user_store)):
    print(f"Creating user: {user.email}, role: {user.role.value}")
    try:
        email = user.email.lower()
        if await store.find_by_email(email):
            print(f"Email already in use: {email}")
            raise HTTPException(status_code=400, detail="Email already in use")

        user_dict = user.model_dump(mode="json", by_alias=True, exclude={"password"})
        user_dict["email"] = email
        user_dict["passwordHash"] = pwd_context.hash(user.password)
        created = await store.create_user(user_dict)
        print(f"User {created['id']} created")
        return normalize_user(created)
    except HTTPException as e:
        raise e
    except Exception as e:
        print(f"Error creating user: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error creating user: {str(e)}")


@router.put("/users/{user_id}/status", response_model=User)
async def update_user_status(user_id: str, update: UserStatusUpdate, store=Depends(get_user_store)):
    try:
        updated = await store.update_user(user_id, {"isActive": update.is_active})
        if not updated:
            print(f"User not found: {user_id}")
            raise HTTPException(status_code=404, detail="User not found")
        print(f"User {user_id} isActive={update.is_active}")
        return normalize_user(updated)
    except HTTPException as e:
        raise e
    except Exception as e:
        print(f"Error updating user status: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error updating user status: {str(e)}")


@router.delete("/users/{user_id}")
async def delete_user(user_id: str, store=Depends(get_user_store)):
    try:
        if not await store.delete_user(user_id):
            print(f"User not found: {user_id}")
            raise HTTPException(status_code=404, detail="User not found")
        print(f"User {user_id} deleted")
        return {"message": f"User {user_id} deleted successfully"}
    except HTTPException as e:
        raise e
    except Exception as e:
        print(f"Error deleting user: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error deleting user: {str(e)}")
