from __future__ import annotations

NOTICE_AUTO_DISMISS_SECONDS = 5

CATALOG_LOAD_FAILED = "পণ্য লোড করতে সমস্যা হয়েছে। পরে আবার চেষ্টা করুন।"
MISSING_TABLE_NUMBER = "দয়া করে টেবিল নম্বর নির্বাচন করুন।"
SUBMISSION_FAILED = "অর্ডার দিতে সমস্যা হয়েছে। পরে আবার চেষ্টা করুন।"
ORDER_PLACED = "আপনার অর্ডার সফলভাবে গ্রহণ করা হয়েছে!"


def transient(message: str) -> dict[str, object]:
    return {"notice": message, "autoDismissSeconds": NOTICE_AUTO_DISMISS_SECONDS}
