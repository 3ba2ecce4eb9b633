"""
App layer: CLI + 외부 협력자.

역할:
- CLI 인자 → ProjectContext (cli.py, context.py)
- 프롬프트/메시지 출력 (messages.py)
- template 단계 → Task 등록 (steps.py)
- 원격 템플릿 다운로드 구현 (providers/)
- ⚠️ 해석/정규화/실패 복구 로직 없음 (src/templates에 위임)
"""
