"""
Saved Application Views

Storage for the admin cover-letter tool.

Endpoints:
- GET    /api/applications       list (newest first)
- POST   /api/applications       create
- GET    /api/applications/:id   retrieve
- PUT    /api/applications/:id   update
- DELETE /api/applications/:id   delete record and list entry
"""
import logging

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import ApplicationCreateSerializer, ApplicationUpdateSerializer
from .services import ApplicationService

logger = logging.getLogger(__name__)

NOT_FOUND = {'error': 'Application not found'}


class ApplicationListCreateView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        try:
            applications = ApplicationService().list()
        except Exception as exc:
            logger.error(f"Error fetching applications: {exc}")
            return Response(
                {'error': 'Failed to fetch applications'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response({'applications': applications})

    def post(self, request):
        serializer = ApplicationCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': 'Missing required fields', 'fields': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )

        data = serializer.validated_data
        try:
            application = ApplicationService().create(
                data['applicationName'],
                data['jobDetails'],
                data['generatedContent'],
            )
        except Exception as exc:
            logger.error(f"Error saving application: {exc}")
            return Response(
                {'error': 'Failed to save application'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return Response({'success': True, 'application': application}, status=status.HTTP_201_CREATED)


class ApplicationDetailView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, id):
        try:
            application = ApplicationService().get(id)
        except Exception as exc:
            logger.error(f"Error fetching application {id}: {exc}")
            return Response(
                {'error': 'Failed to fetch application'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        if application is None:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response({'application': application})

    def put(self, request, id):
        serializer = ApplicationUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': 'Invalid application data', 'fields': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )

        data = serializer.validated_data
        try:
            application = ApplicationService().update(
                id,
                name=data.get('applicationName'),
                job_details=data.get('jobDetails'),
                generated_content=data.get('generatedContent'),
            )
        except Exception as exc:
            logger.error(f"Error updating application {id}: {exc}")
            return Response(
                {'error': 'Failed to update application'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        if application is None:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response({'success': True, 'application': application})

    def delete(self, request, id):
        try:
            ApplicationService().delete(id)
        except Exception as exc:
            logger.error(f"Error deleting application {id}: {exc}")
            return Response(
                {'error': 'Failed to delete application'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        return Response({'success': True})
