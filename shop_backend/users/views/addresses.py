# users/views/addresses.py

from __future__ import annotations

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from users.models import Address
from users.permissions import IsCustomer
from users.serializers import AddressSerializer


class AddressListView(APIView):
    """
    Saved shipping addresses of the logged user.
    """

    permission_classes = [IsCustomer]
    serializer_class = AddressSerializer

    @extend_schema(responses={200: AddressSerializer(many=True)})
    def get(self, request):
        qs = Address.objects.filter(user=request.user)
        return Response(AddressSerializer(qs, many=True).data)

    @extend_schema(request=AddressSerializer, responses={201: AddressSerializer})
    def post(self, request):
        s = AddressSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        address = s.save(user=request.user)
        return Response(AddressSerializer(address).data, status=status.HTTP_201_CREATED)


class AddressDetailView(APIView):
    permission_classes = [IsCustomer]

    @extend_schema(responses={204: None})
    def delete(self, request, address_id):
        address = get_object_or_404(Address, id=address_id, user=request.user)
        address.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
