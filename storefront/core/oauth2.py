from fastapi.security import OAuth2PasswordBearer

# Admin bearer token, issued by /api/admin/login
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/admin/login")
