from aws_lambda_powertools import Logger


def get_logger() -> Logger:
    """アプリケーション層のロガー

    ハンドラの Logger の子ロガーとして生成するため、
    inject_lambda_context で付与した Lambda コンテキストが同じく出力される。
    """
    return Logger(child=True)
