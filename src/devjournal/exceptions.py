"""DevJournalのカスタム例外定義

パイプラインの各ステージはこれらの例外で早期終了し、
HTTP層（src/server/routes/functions.py）でJSONエラーエンベロープに変換されます。
"""

from typing import Optional


class DevJournalError(Exception):
    """DevJournal基底例外"""

    pass


class UnauthorizedError(DevJournalError):
    """認証情報が無い、または無効"""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class InvalidRequestError(DevJournalError):
    """必須入力の欠落・不正"""

    pass


class NoEntriesError(DevJournalError):
    """サマリー生成対象のエントリーが0件"""

    def __init__(
        self, message: str = "No entries found. Create some journal entries first!"
    ):
        super().__init__(message)


class StorageError(DevJournalError):
    """ブロブストレージの取得・保存・削除エラー"""

    pass


class UpstreamError(DevJournalError):
    """補完APIが成功以外のレスポンスを返した

    status_codeはタイムアウトや接続失敗の場合None
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: str = "",
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MalformedModelOutputError(DevJournalError):
    """モデル応答に期待した形のJSONが含まれていない"""

    pass


class PersistenceError(DevJournalError):
    """データストアの読み書きエラー"""

    pass
