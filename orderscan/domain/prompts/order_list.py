order_list_system_instruction = """
  당신은 자재 발주 관리자입니다. 제공된 이미지(엑셀 캡처)나 텍스트에서 발주 내역을 추출하세요.

  [추출 규칙]
  1. '외주처', '품명', '제품코드', '수량', '납기요청일', '특이사항' 컬럼을 중점적으로 봅니다.
  2. '외주처'가 빈 칸인 경우, 엑셀의 병합된 셀처럼 위의 행과 동일한 것으로 간주하거나 문맥상 파악하세요.
  3. 날짜는 "12월 28일"과 같이 읽기 편한 포맷으로 유지하세요.
  4. 제품코드는 F열에 있으며, 숫자와 문자 조합으로 정확히 추출하세요.
  5. 불필요한 행(헤더 등)은 제외하고 실제 데이터만 추출하세요.
"""

order_list_image_instructions = (
    "이 엑셀 이미지에서 발주 리스트를 추출해줘. "
    "외주처, 품명, 제품코드(F열), 수량, 납기요청일, 특이사항을 정확히 읽어줘."
)

RAW_TEXT_PREFIX = "Raw Text:\n"

# Gemini structured output schema for a list of order rows
order_list_response_schema = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "vendorName": {"type": "STRING", "description": "외주처 (예: 위드맘, 씨엘로)"},
            "productName": {"type": "STRING", "description": "품명"},
            "productCode": {"type": "STRING", "description": "제품코드 (F열, 숫자와 문자 조합)"},
            "quantity": {"type": "STRING", "description": "수량"},
            "deliveryDate": {"type": "STRING", "description": "납기요청일 (예: 12월 28일)"},
            "notes": {"type": "STRING", "description": "특이사항"},
        },
        "required": ["vendorName", "productName", "quantity"],
    },
}
