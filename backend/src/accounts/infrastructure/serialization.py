from pydantic import TypeAdapter

from accounts.domain.entities import Account

_account_adapter = TypeAdapter(Account)


def account_to_dict(account: Account) -> dict:
    return _account_adapter.dump_python(account, mode="json")


def account_from_dict(data: dict) -> Account:
    return _account_adapter.validate_python(data)
