"""
CareerPath - 커리어 패스 분류 트리 및 게시글 서비스

공통 모듈(common)을 통해 DB 연결, 설정, 권한 검증을 중앙에서 관리합니다.
도메인: user(계정), taxonomy(분류 트리), post(커리어 게시글).
"""
