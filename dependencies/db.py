from database.db import SessionLocal


# ✅ DB 세션 의존성 주입 함수 (요청 단위 세션, 요청이 끝나면 닫음)
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
