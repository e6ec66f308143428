# payments/views/stripe_webhook.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from payments.services import WebhookReconciler, gateway_from_settings


class WebhookThrottle(AnonRateThrottle):
    scope = "webhook"


class StripeWebhookView(APIView):
    """
    POST /webhook-checkout

    The signature covers the exact bytes sent, so the body is read raw
    (request.body) and request.data is never touched.
    """

    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [WebhookThrottle]

    @extend_schema(request=None, responses={200: dict, 400: dict})
    def post(self, request, *args, **kwargs):
        raw_body = request.body or b""
        signature = request.headers.get("Stripe-Signature")

        result = WebhookReconciler(gateway_from_settings()).handle_event(raw_body, signature)
        return Response(result, status=status.HTTP_200_OK)
