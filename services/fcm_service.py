import logging
import os
from typing import Optional

import firebase_admin
from firebase_admin import credentials, messaging

from config import FIREBASE_CREDENTIALS_PATH

logger = logging.getLogger("travelmates.fcm")

# Initialize Firebase Admin once
_initialized = False

def initialize_firebase_admin():
    """Initialize the Firebase Admin SDK"""
    global _initialized
    if _initialized:
        return
    try:
        if os.path.exists(FIREBASE_CREDENTIALS_PATH):
            cred = credentials.Certificate(FIREBASE_CREDENTIALS_PATH)
            firebase_admin.initialize_app(cred)
            _initialized = True
            logger.info("Firebase Admin initialized with %s", FIREBASE_CREDENTIALS_PATH)
        elif os.getenv("GOOGLE_APPLICATION_CREDENTIALS"):
            # Production: credentials from the environment
            firebase_admin.initialize_app()
            _initialized = True
            logger.info("Firebase Admin initialized from environment")
        else:
            logger.warning("Firebase credentials not found at %s; push notifications disabled", FIREBASE_CREDENTIALS_PATH)
    except Exception:
        logger.exception("Error initializing Firebase Admin")
        _initialized = False

def send_notification(
    fcm_token: str,
    title: str,
    body: str,
    data: Optional[dict] = None
) -> bool:
    """Send a push notification to one device. Never raises."""
    initialize_firebase_admin()

    if not _initialized or not fcm_token:
        return False

    try:
        message = messaging.Message(
            notification=messaging.Notification(
                title=title,
                body=body,
            ),
            data=data or {},
            token=fcm_token,
            apns=messaging.APNSConfig(
                payload=messaging.APNSPayload(
                    aps=messaging.Aps(
                        badge=1,
                        sound="default",
                    ),
                ),
            ),
            android=messaging.AndroidConfig(
                priority="high",
                notification=messaging.AndroidNotification(
                    sound="default",
                    channel_id="high_importance_channel",
                ),
            ),
        )

        response = messaging.send(message)
        logger.info("Push sent: %s", response)
        return True
    except Exception:
        logger.exception("Error sending push notification")
        return False
