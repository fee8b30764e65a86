import json


def api_response(status_code: int, body: dict) -> dict:
    """API Gateway HTTP API のレスポンス形式を生成する

    金額や座標の Decimal は文字列として出力する。
    表示名などの非 ASCII 文字はエスケープしない。
    """
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json; charset=utf-8"},
        "body": json.dumps(body, default=str, ensure_ascii=False),
    }
