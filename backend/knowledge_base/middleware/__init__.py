"""요청 인증 미들웨어/의존성 패키지입니다."""
