"""
RabbitMQ Event Publisher for order events
"""
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Dict

import pika

from app.config import Settings

logger = logging.getLogger(__name__)


class EventPublisher:
    """Publisher for sending order events to RabbitMQ"""
    
    def __init__(self, rabbitmq_url: str, exchange: str, source: str, enabled: bool = True):
        self.rabbitmq_url = rabbitmq_url
        self.exchange = exchange
        self.source = source
        self.enabled = enabled
    
    @classmethod
    def from_settings(cls, settings: Settings) -> "EventPublisher":
        return cls(
            rabbitmq_url=settings.RABBITMQ_URL,
            exchange=settings.RABBITMQ_EXCHANGE,
            source=settings.SERVICE_NAME,
            enabled=settings.EVENTS_ENABLED
        )
    
    def publish(self, event_type: str, routing_key: str, data: Dict) -> bool:
        """
        Publish an event to the topic exchange
        
        Args:
            event_type: Event name, e.g. OrderPlaced
            routing_key: Topic routing key
            data: Event payload
        
        Returns:
            True if published successfully, False otherwise
        """
        if not self.enabled:
            logger.debug("Events disabled, skipping %s", event_type)
            return False
        
        event = {
            "event_type": event_type,
            "event_id": str(uuid.uuid4()),
            "event_version": "1.0",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "source": self.source,
            "data": data
        }
        
        try:
            connection = pika.BlockingConnection(
                pika.URLParameters(self.rabbitmq_url)
            )
            try:
                channel = connection.channel()
                channel.exchange_declare(
                    exchange=self.exchange,
                    exchange_type='topic',
                    durable=True
                )
                
                # Enable publisher confirms
                channel.confirm_delivery()
                
                channel.basic_publish(
                    exchange=self.exchange,
                    routing_key=routing_key,
                    body=json.dumps(event, default=str),
                    properties=pika.BasicProperties(
                        delivery_mode=2,  # Persistent message
                        content_type='application/json',
                        correlation_id=event["event_id"]
                    )
                )
            finally:
                connection.close()
        except pika.exceptions.AMQPError as e:
            logger.warning("✗ Error publishing %s event: %s", event_type, e)
            return False
        
        logger.info("✓ Event published: %s (ID: %s)", event_type, event["event_id"])
        return True
    
    def publish_order_placed(self, order_data: Dict) -> bool:
        return self.publish("OrderPlaced", "order.placed", order_data)
    
    def publish_payment_status_changed(self, order_data: Dict) -> bool:
        return self.publish("PaymentStatusChanged", "order.payment.changed", order_data)
    
    def publish_order_status_changed(self, order_data: Dict) -> bool:
        return self.publish("OrderStatusChanged", "order.status.changed", order_data)
