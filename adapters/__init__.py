"""
어댑터 레이어

외부 가져오기(import) 어댑터와의 경계.
각 어댑터는 원본 파일 형식을 TransactionDescriptor로 변환하여 전달.
"""

from adapters.models import TransactionDescriptor

__all__ = [
    "TransactionDescriptor",
]
